# bookreg/busy.py
"""
Busy gating for controls that trigger a network call.

A click only records the request (`request_action`, used as an on_click
callback). The script run that follows draws every control disabled and then
runs the pending action (`run_pending`); the flag is cleared afterwards even
when the action fails.
"""
from typing import Callable, Mapping, MutableMapping


def request_action(state: MutableMapping, action: str) -> None:
    if state.get("busy"):
        return
    state["busy"] = True
    state["pending"] = action


def run_pending(state: MutableMapping, handlers: Mapping[str, Callable[[], None]]) -> bool:
    action = state.get("pending")
    if action not in handlers:
        return False
    state["pending"] = None
    try:
        handlers[action]()
    finally:
        state["busy"] = False
    return True
