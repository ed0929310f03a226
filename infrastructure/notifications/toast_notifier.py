from dataclasses import dataclass
from typing import List, Literal

import streamlit as st

NotificationLevel = Literal["success", "error", "info"]

TOAST_QUEUE_KEY = "toast_queue"

_ICONS = {
    "success": "✅",
    "error": "🚨",
    "info": "ℹ️",
}


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    level: NotificationLevel = "success"


class ToastNotifier:
    """
    Fire-and-forget notification sink.
    Toasts are queued in session state and shown on the next script run,
    so a notification raised right before st.rerun() is not lost.
    """

    def notify(self, notification: Notification) -> None:
        queue = st.session_state.setdefault(TOAST_QUEUE_KEY, [])
        queue.append(notification)

    def pending(self) -> List[Notification]:
        return list(st.session_state.get(TOAST_QUEUE_KEY, []))

    def flush(self) -> int:
        queue = st.session_state.get(TOAST_QUEUE_KEY) or []
        for item in queue:
            st.toast(f"**{item.title}**  \n{item.description}", icon=_ICONS.get(item.level))
        st.session_state[TOAST_QUEUE_KEY] = []
        return len(queue)
