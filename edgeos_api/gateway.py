"""Maps configuration operations onto requests and decodes their envelopes."""

from .logging_setup import log
from .operations import ConfigurationOperation, ConfigurationResponse, DeviceOperation
from .requester import Requester


def execute(requester: Requester, operation: ConfigurationOperation) -> ConfigurationResponse | None:
    """
    Run *operation* and decode the device's answer.

    Returns None when the device sent no body.
    """
    form = operation.form() if isinstance(operation, DeviceOperation) else None
    data = requester.call(
        operation.method,
        operation.url(),
        document=operation.body(),
        form=form,
        mutating=operation.mutating,
    )
    if data is None:
        log.debug("%s returned no content", operation.url())
        return None

    response = ConfigurationResponse.from_wire(data, operation.section)
    if response.failure:
        log.warning("%s reported failure: %s", operation.url(), response.errors or {})
    return response
