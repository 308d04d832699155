from __future__ import annotations

import logging
from typing import Optional, Sequence

import httpx

from story_spoiler.config import Settings, load_dotenv_files, load_settings
from story_spoiler.errors import SetupError
from story_spoiler.http.client import HttpFactory, connect
from story_spoiler.logging_setup import configure_logging
from story_spoiler.logic.scenarios import FULL_RUN, Scenario, run_scenarios
from story_spoiler.logic.session import SessionState

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SCENARIO_FAILURES = 1
EXIT_SETUP_FAILURE = 2


def run_suite(
    settings: Settings,
    *,
    http_factory: HttpFactory = httpx.Client,
    scenarios: Sequence[Scenario] = FULL_RUN,
) -> int:
    """Authenticate, run `scenarios` in order and release the client.

    Setup errors propagate to the caller; nothing runs without a token. The
    client is closed whatever the scenarios do.
    """
    client = connect(settings, http_factory=http_factory)
    session = SessionState()
    try:
        outcomes = run_scenarios(client, session, scenarios)
    finally:
        client.close()

    failed = [o for o in outcomes if not o.ok]
    logger.info("Ran %d scenarios: %d passed, %d not passed", len(outcomes), len(outcomes) - len(failed), len(failed))
    return EXIT_SCENARIO_FAILURES if failed else EXIT_OK


def main(settings: Optional[Settings] = None) -> int:
    configure_logging()
    load_dotenv_files()
    try:
        return run_suite(settings or load_settings())
    except SetupError as e:
        logger.error("Aborting run: %s", e)
        return EXIT_SETUP_FAILURE


__all__ = ["EXIT_OK", "EXIT_SCENARIO_FAILURES", "EXIT_SETUP_FAILURE", "main", "run_suite"]
