"""
Node reporting channel.

The host gives every node a way to emit messages and to surface warnings
and errors in the editor. Gateways only depend on the NodeChannel protocol.

Dependencies: logging (stdlib), cloudant_bridge.observability
System role: Outbound side of a gateway node
"""

import logging
from typing import Any, Callable, Protocol

from cloudant_bridge.observability.log_utils import log_with_context


class NodeChannel(Protocol):
    """Host services available to a single node."""

    def send(self, msg: dict[str, Any]) -> None: ...

    def warn(self, message: str, context: Any = None) -> None: ...

    def error(self, message: str, context: Any = None) -> None: ...


class LoggingChannel:
    """NodeChannel that reports through logging and forwards sends to a callback."""

    def __init__(
        self,
        node_name: str,
        on_send: Callable[[dict[str, Any]], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize channel.

        Args:
            node_name: Name shown in every log record
            on_send: Receives each emitted message (dropped if None)
            logger: Logger to report to (module logger if None)
        """
        self.node_name = node_name
        self._on_send = on_send
        self._logger = logger or logging.getLogger(__name__)

    def send(self, msg: dict[str, Any]) -> None:
        if self._on_send is None:
            log_with_context(
                self._logger, logging.DEBUG, "Message dropped, no receiver",
                node=self.node_name, msgid=msg.get("_msgid"),
            )
            return
        self._on_send(msg)

    def warn(self, message: str, context: Any = None) -> None:
        log_with_context(
            self._logger, logging.WARNING, message,
            node=self.node_name, context=_describe(context),
        )

    def error(self, message: str, context: Any = None) -> None:
        log_with_context(
            self._logger, logging.ERROR, message,
            node=self.node_name, context=_describe(context),
        )


def _describe(context: Any) -> Any:
    details = getattr(context, "details", None)
    if isinstance(details, dict):
        return str(details)
    return context
