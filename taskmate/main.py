from __future__ import annotations

import logging

from taskmate.config import SETTINGS
from taskmate.infra.logging import setup_logging
from taskmate.infra.storage import TaskStorage
from taskmate.services.assistant import Assistant

logger = logging.getLogger(__name__)


def build_assistant() -> Assistant:
    storage = TaskStorage(SETTINGS.data_file)
    return Assistant(storage, match_time=SETTINGS.duplicate_match_time)


def run(assistant: Assistant) -> None:
    print(assistant.get_welcome_message(), end="")
    while not assistant.is_exit:
        try:
            line = input()
        except (EOFError, KeyboardInterrupt):
            break
        print(assistant.get_response(line), end="")


def main() -> None:
    setup_logging()
    logger.info("Starting with data file %s", SETTINGS.data_file)
    run(build_assistant())


if __name__ == "__main__":
    main()
