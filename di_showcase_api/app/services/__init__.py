"""
Service layer.

Every service receives its collaborators through ``__init__`` and is
registered in ``core.wiring``.  Services never construct each other,
which is what lets the API swap an ``EmailSender`` or add a
notification channel without changing their consumers.
"""
