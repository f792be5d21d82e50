from trustlink.utils.constants import SETUP_STATUSES

ALLOWED_TRANSITIONS = {
    "pending": ["completed"],
    "completed": [],
}


class InvalidTransition(ValueError):
    pass


def ensure_transition(current: str, target: str) -> None:
    if current not in SETUP_STATUSES:
        raise InvalidTransition(f"Unknown state: {current}")
    if target not in SETUP_STATUSES:
        raise InvalidTransition(f"Unknown target state: {target}")

    allowed = ALLOWED_TRANSITIONS.get(current, [])
    if target not in allowed:
        raise InvalidTransition(f"Invalid transition: {current} -> {target}")
