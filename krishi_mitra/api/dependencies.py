from typing import Optional

from krishi_mitra.collections.activity_log import get_activity_logs
from krishi_mitra.core.genai_client import get_client_provider
from krishi_mitra.services.advisory_mediator import AdvisoryMediator

_mediator: Optional[AdvisoryMediator] = None


def get_advisory_mediator() -> AdvisoryMediator:
    global _mediator
    if _mediator is None:
        _mediator = AdvisoryMediator(
            client_provider=get_client_provider(),
            activity_source=get_activity_logs,
        )
    return _mediator
