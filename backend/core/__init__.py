from core.classifier import classify, classify_backend_driven, CLASSIFICATION_ORDER  # noqa: F401
from core.normalizer import normalize  # noqa: F401
from core.dispatcher import DispatchEngine  # noqa: F401
from core.confirmation import confirm_selection  # noqa: F401
from core.transcript_store import TranscriptStore, Transcript  # noqa: F401
from core.session import ChatSession  # noqa: F401
