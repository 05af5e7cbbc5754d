"""mxbot Bootstrap - settings, logging, config, and the three state records, in that order.

Invariants:
    - Config is fully resolved before any state record is touched
    - Any MxBotError during bootstrap is fatal: the full cause chain is logged and
      main() returns exit status 1
    - Each state record is loaded exactly once here; later saves go through its store

Design Decisions:
    - BotRuntime bundles what the transport layer needs, so nothing re-reads the environment
    - main() doubles as a config checker (`mxbot-check`): it loads everything and exits
"""

import logging
import sys
from dataclasses import dataclass

from mxbot.config import Settings, get_settings
from mxbot.core.errors import MxBotError
from mxbot.core.feature import is_enabled
from mxbot.core.resolved_config import Config, ListenerConfig, WebhookConfig
from mxbot.infrastructure.config_file import load_config
from mxbot.infrastructure.observability import setup_logging
from mxbot.infrastructure.state_store import (
    StateStore,
    listener_store,
    responder_store,
    session_store,
)
from mxbot.schemas.state import ListenerState, ResponderState, SessionState

logger = logging.getLogger(__name__)


@dataclass
class BotRuntime:
    """Everything loaded at startup, handed to the transport and dispatch layers."""
    config: Config
    session: SessionState
    listener: ListenerState
    responder: ResponderState
    session_store: StateStore[SessionState]
    listener_store: StateStore[ListenerState]
    responder_store: StateStore[ResponderState]

    @property
    def listener_config(self) -> ListenerConfig:
        return ListenerConfig.from_config(self.config)

    @property
    def webhook_config(self) -> WebhookConfig:
        return WebhookConfig.from_config(self.config)


def bootstrap(settings: Settings) -> BotRuntime:
    """Load config and state. Raises MxBotError on any failure."""
    config = load_config(settings.config_path)
    sessions = session_store(settings.data_dir)
    listeners = listener_store(settings.data_dir)
    responders = responder_store(settings.data_dir)
    return BotRuntime(
        config=config,
        session=sessions.load(),
        listener=listeners.load(),
        responder=responders.load(),
        session_store=sessions,
        listener_store=listeners,
        responder_store=responders,
    )


def summarize(config: Config) -> dict[str, bool]:
    """Feature -> enabled, for the startup log."""
    return {
        "github_search": is_enabled(config.github_search),
        "link_keywords": is_enabled(config.link_keywords),
        "spell_corrections": is_enabled(config.spell_corrections),
        "group_pings": is_enabled(config.group_pings),
        "unit_conversions": config.enable_unit_conversions,
        "text_expansions": bool(config.text_expansions),
        "ban_rooms": bool(config.ban_rooms),
    }


def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    try:
        runtime = bootstrap(settings)
    except MxBotError as exc:
        report = exc.to_report()["error"]
        logger.critical(
            f"Startup failed: {exc.message}",
            extra={"error_code": exc.code, "path": exc.context.path},
        )
        for cause in report["causes"]:
            logger.critical(f"  caused by {cause}")
        return 1
    features = summarize(runtime.config)
    logger.info(
        "Config OK for %s (%s); enabled: %s",
        runtime.config.username,
        runtime.config.user_agent,
        ", ".join(name for name, on in features.items() if on) or "none",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
