# smart_invoice/state_classifier.py
# Free-text address -> state name, and state -> Jubilant billing entity.
# Substring matching on addresses is knowingly loose (a district whose name
# contains a state name will classify as that state).

from .constants import (DEFAULT_STATE, INTER_STATE_STATES, JUBILANT_LOCATIONS, OTHER_MAIN_STATES,
                        REGIONAL_UP_VARIATIONS)


def extract_state_from_address(address):
    """
    Always returns a state name. Regional UP labels ('East UP', ...) map to
    Uttar Pradesh, then the other states are tried in priority order.
    """
    address_lower = (address or "").lower()

    for regional_up in REGIONAL_UP_VARIATIONS:
        if regional_up.lower() in address_lower:
            return DEFAULT_STATE

    for state in OTHER_MAIN_STATES:
        if state.lower() in address_lower:
            return state

    return DEFAULT_STATE


def get_jurisdiction(state):
    """Jubilant entity (address lines, GSTIN, inter-state flag) billed for a state."""
    return JUBILANT_LOCATIONS.get(state, JUBILANT_LOCATIONS[DEFAULT_STATE])


def is_inter_state(state):
    return state in INTER_STATE_STATES
