import logging

from di_showcase_api.app.core.logging_config import PACKAGE_LOGGER, category_logger, setup_logging


def test_entries_are_grouped_by_request(client):
    first = client.post(
        "/api/v1/notifications/",
        json={"recipient": "ada@example.com", "message": "one", "channels": ["log"]},
    ).json()
    client.post(
        "/api/v1/notifications/",
        json={"recipient": "bob@example.com", "message": "two", "channels": ["log"]},
    )

    entries = client.get("/api/v1/logs/", params={"request_id": first["request_id"]}).json()
    assert len(entries) == 1
    assert entries[0]["category"] == "notifications"
    assert entries[0]["level"] == "INFO"
    assert "ada@example.com" in entries[0]["message"]


def test_entries_are_newest_first_with_details(client):
    client.post("/api/v1/emails/", json={"to": "ada@example.com", "subject": "1"})
    client.post("/api/v1/emails/", json={"to": "ada@example.com", "subject": "2"})

    entries = client.get("/api/v1/logs/", params={"category": "email"}).json()
    assert len(entries) == 2
    assert entries[0]["id"] > entries[1]["id"]
    assert entries[0]["details"]["message_id"] == 2

    assert len(client.get("/api/v1/logs/", params={"category": "email", "limit": 1}).json()) == 1


def test_unknown_level_is_rejected(client):
    assert client.get("/api/v1/logs/", params={"level": "LOUD"}).status_code == 422


def test_category_loggers_live_under_the_package_logger():
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    setup_logging("WARNING")
    handlers = list(package_logger.handlers)

    setup_logging("debug")
    assert package_logger.handlers == handlers
    assert package_logger.level == logging.DEBUG
    assert category_logger("email").name == "di_showcase_api.email"
    assert category_logger("email").parent is package_logger
