from __future__ import annotations

import logging
import re
from typing import Callable, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

FLAG_PREFIXES: Tuple[str, ...] = ("--", "-", "/")
FLAG_NAME = "topic"
VALUE_DELIMITERS = (":", "=")
HELP_NAMES = ("h", "help", "?")

PROMPT = "Please provide a Wikipedia topic (or Ctrl-C to quit): "

_VALUE_PATTERN = re.compile(r"[\w\s]+", re.ASCII)


def _normalize(topic: str) -> str:
    return topic.replace(" ", "_")


def _strip_prefix(token: str) -> Optional[str]:
    """Return *token* without its flag prefix, or None if it has none.

    ``--`` is tried before ``-`` so that ``--topic`` is not read as ``-`` + ``-topic``.
    """
    for prefix in FLAG_PREFIXES:
        if token.startswith(prefix):
            return token[len(prefix):]
    return None


def is_help_request(args: Sequence[str]) -> bool:
    """True when the first argument is -h, --help, /?, etc. Later arguments are ignored."""
    if not args:
        return False
    name = _strip_prefix(args[0])
    return name in HELP_NAMES


def _read_topic_flag(token: str) -> Tuple[str, Optional[str]]:
    """Classify the first argument.

    Returns one of:
    - ("none", None)      not a topic flag, the token is a topic fragment
    - ("bare", None)      exactly the flag, value follows in the next argument
    - ("embedded", value) flag, delimiter and an inline value
    - ("empty", None)     flag and delimiter with nothing after it
    """
    rest = _strip_prefix(token)
    if rest is None or not rest.startswith(FLAG_NAME):
        return "none", None
    rest = rest[len(FLAG_NAME):]
    if rest == "":
        return "bare", None
    if rest[0] not in VALUE_DELIMITERS:
        return "none", None
    value = rest[1:]
    if value == "":
        return "empty", None
    if not _VALUE_PATTERN.fullmatch(value):
        return "none", None
    return "embedded", value


def topic_from_args(args: Sequence[str]) -> str:
    """Build a Wikipedia topic from command-line arguments.

    Accepted forms, all equivalent::

        /topic Babe Ruth
        --topic=Babe Ruth
        -topic:Babe Ruth
        Babe Ruth

    Only the first argument is checked for the ``topic`` flag; anything after it
    is a fragment of the topic. Fragments are joined with single spaces and every
    space becomes an underscore.

    Returns the normalized topic, or ``""`` when no topic could be determined
    (no arguments, an empty argument, a flag without a value).
    """
    if not args or any(a == "" for a in args):
        return ""

    kind, inline = _read_topic_flag(args[0])
    if kind == "empty":
        logger.debug("Topic flag %r has an empty inline value", args[0])
        return ""
    if kind == "bare" and len(args) == 1:
        logger.debug("Topic flag %r given without a value", args[0])
        return ""
    if kind == "embedded" and len(args) == 1:
        return _normalize(inline)

    fragments = list(args[1:]) if kind in ("bare", "embedded") else list(args)
    if inline:
        fragments.insert(0, inline)
    return _normalize(" ".join(fragments))


def prompt_for_topic(read: Callable[[str], str] = input) -> str:
    """Ask on the terminal until a non-empty topic is entered.

    Exceptions raised by *read* (EOFError on Ctrl-D included) propagate to the caller.
    """
    while True:
        answer = read(PROMPT)
        if answer in ("", "\n"):
            continue
        return _normalize(answer)
