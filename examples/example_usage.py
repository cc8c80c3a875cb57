"""Example: drive the service layer directly (no Flask).

Registers a participant for the first seeded event and scans the issued
credential twice; the second scan is rejected as already attended.
"""

import importlib

from config import get_settings_module

from src.event_checkin.event_checkin.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    event = container.events_repo.list_all()[0]
    reg = container.registration_service.register(event.id, "Demo Participant", "demo@example.com")
    print(reg.registration_id, reg.qr_payload)

    for _ in range(2):
        result = container.checkin_service.scan(reg.qr_payload)
        print(result.state.value, result.reason, result.message)


if __name__ == "__main__":
    main()
