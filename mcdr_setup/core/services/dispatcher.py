"""
Action dispatcher — validate an ActionRequest, then run one operation.

The terminal UI calls :meth:`ActionDispatcher.validate` in its prompt
loop and only calls :meth:`ActionDispatcher.dispatch` once the request
is valid.  Dispatching an invalid request is a programming error.
"""

from __future__ import annotations

import logging

from mcdr_setup.core.domain.state_machine import InstallPlan
from mcdr_setup.core.domain.validation import validate_request
from mcdr_setup.core.errors import InvalidRequestError
from mcdr_setup.core.models.action import ActionKind, ActionRequest, Receipt
from mcdr_setup.core.services.operations import Operations

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """Routes a validated request to exactly one operation."""

    def __init__(self, plan: InstallPlan, operations: Operations):
        self.plan = plan
        self.operations = operations

    def validate(self, request: ActionRequest) -> str | None:
        """Return an error message, or ``None`` when ``request`` is legal."""
        return validate_request(request, self.plan)

    def dispatch(self, request: ActionRequest) -> Receipt:
        """Run the operation for ``request`` and return its receipt.

        Raises:
            InvalidRequestError: If ``request`` fails validation.
        """
        error = self.validate(request)
        if error:
            raise InvalidRequestError(error)

        logger.info("Dispatching %s", request.kind.value)
        ops = self.operations
        kind = request.kind

        if kind is ActionKind.INSTALL_INTERPRETER:
            assert request.version is not None  # guaranteed by validation
            return ops.install_interpreter(request.version)

        if kind is ActionKind.INSTALL_PACKAGE:
            receipt = ops.install_package()
            if receipt.ok and request.initialize_after_install:
                return ops.initialize_package()
            return receipt

        if kind is ActionKind.UPGRADE_PACKAGE:
            return ops.upgrade_package()

        if kind is ActionKind.INITIALIZE_PACKAGE:
            return ops.initialize_package()

        if kind is ActionKind.MANAGE_MODULES:
            assert request.modules is not None  # guaranteed by validation
            return ops.install_modules(request.modules)

        if kind is ActionKind.OPEN_CONSOLE:
            return ops.open_console()

        raise InvalidRequestError(f"Unhandled action: {kind.value}")
