"""Slack Web API and Events API provider."""

from chatrelay.providers.slack.base import SlackProvider
from chatrelay.providers.slack.config import SlackConfig
from chatrelay.providers.slack.mock import MockSlackProvider
from chatrelay.providers.slack.web import SlackWebProvider
from chatrelay.providers.slack.webhook import is_url_verification, parse_slack_webhook

__all__ = [
    "MockSlackProvider",
    "SlackConfig",
    "SlackProvider",
    "SlackWebProvider",
    "is_url_verification",
    "parse_slack_webhook",
]
