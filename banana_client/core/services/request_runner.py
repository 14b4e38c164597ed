"""Dispatching of blocking API calls on behalf of the round controller.

A runner exposes ``run(call, on_success, on_failure)``. It executes ``call``
and later invokes exactly one of the callbacks on the thread that owns the
controller. The Qt application uses ``banana_client.ui.qt_runner.QtRequestRunner``;
``ImmediateRunner`` below is the synchronous variant for headless use.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from banana_client.core.errors import BananaClientError

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[Any], None]
FailureCallback = Callable[[Exception], None]


class ImmediateRunner:
    """Runs each call in place and reports the outcome before returning."""

    def run(
        self,
        call: Callable[[], Any],
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        try:
            result = call()
        except BananaClientError as exc:
            on_failure(exc)
            return
        except Exception as exc:
            logger.exception("Unexpected error in request")
            on_failure(exc)
            return
        on_success(result)
