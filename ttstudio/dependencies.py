from typing import Annotated

from fastapi import Depends

from ttstudio.config import Settings, get_settings
from ttstudio.tts.base import SynthesisAdapter
from ttstudio.tts.orchestrator import SynthesisOrchestrator, get_orchestrator
from ttstudio.tts.utils import get_synthesis_adapter
from ttstudio.tts.voices import VoiceCatalog, get_voice_catalog


def get_adapter() -> SynthesisAdapter:
    """Synthesis adapter for one request."""
    return get_synthesis_adapter()


def get_request_orchestrator(
    adapter: Annotated[SynthesisAdapter, Depends(get_adapter)],
) -> SynthesisOrchestrator:
    """Orchestrator for one request, owning that request's run state."""
    return get_orchestrator(adapter)


# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
Catalog = Annotated[VoiceCatalog, Depends(get_voice_catalog)]
Adapter = Annotated[SynthesisAdapter, Depends(get_adapter)]
Orchestrator = Annotated[SynthesisOrchestrator, Depends(get_request_orchestrator)]
