from __future__ import annotations

import logging
import signal
import sys
from typing import Callable, List, Optional

from config import Settings, get_settings
from parser import fetch_topic
from topic import is_help_request, prompt_for_topic, topic_from_args

logger = logging.getLogger(__name__)

HELP_MESSAGE = """

wikiscrape - find a topic on Wikipedia's EN site, and print its
introductory paragraph.

Usage:

wikiscrape [/topic | -topic | --topic] topicName
    where topicName is the name of a Wikipedia topic

wikiscrape [/topic | -topic | --topic](= | :)topicName
    where topicName is the name of a Wikipedia topic. Examples:
        wikiscrape /topic:Babe Ruth or
        wikiscrape --topic=Babe Ruth

wikiscrape topicName
    where topicName is the name of a Wikipedia topic.

wikiscrape [-? | --? | /? | -h[elp] | --h[elp] | /h[elp]]
The topic name does not need to be enclosed in quotes if there are spaces,
this program will account for that (quotes are OK though).

If an existing Wikipedia topic is provided,
the introductory paragraph will be displayed.  If the topic is not found, a
message indicating that will be displayed.  If no topic name is provided,
you will be prompted for one.  The program can be exited at any time by
pressing Ctrl-C on the keyboard."""


def _on_interrupt(signum, frame) -> None:
    print("\nUser terminated the application.", flush=True)
    sys.exit(0)


def _has_console() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def _configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(
    argv: Optional[List[str]] = None,
    settings: Optional[Settings] = None,
    read: Callable[[str], str] = input,
) -> int:
    args = sys.argv[1:] if argv is None else argv
    settings = settings or get_settings()
    _configure_logging(settings)

    if not _has_console():
        print("Error - must have a console!", file=sys.stderr)
        return 1

    # Help wins over a topic, later arguments included
    if is_help_request(args):
        print(HELP_MESSAGE)
        return 0

    signal.signal(signal.SIGINT, _on_interrupt)

    topic = topic_from_args(args)
    if not topic:
        try:
            topic = prompt_for_topic(read)
        except EOFError:
            return 1
        except Exception as e:
            print(f"An exception ocurred when trying to prompt the user for a topic: {e}")
            return 1

    logger.debug("Resolved topic %r", topic)
    fetch_topic(topic, settings)
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
