"""Shared defaults for coachflow."""

DEFAULT_RECENT_TURNS_MAX = 16
MAX_PRESERVED_SYSTEM_TURNS = 2

LAUNCH_CONTEXT_MARKER = "launch source:"
LAUNCH_CONTEXT_PREFIX = (
    "Launch context (where/why this chat was opened; use as grounding context):\n"
)
CONVERSATION_SUMMARY_PREFIX = (
    "Conversation memory summary (use only as background context; do not quote verbatim):\n"
)

DEFAULT_SNAPSHOT_MAX_CHARS = 8000
SNAPSHOT_ELLIPSIS = "…"
SNAPSHOT_TRUNCATION_NOTICE = "\n\n[Workspace snapshot truncated to fit context budget.]"

DEFAULT_QUALITY_THRESHOLD = 8
QUALITY_RUBRIC_DIMENSIONS = (
    "specificity",
    "coherence",
    "depth",
    "voice",
    "constraint_adherence",
)
