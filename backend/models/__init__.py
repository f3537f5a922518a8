from models.chat import ChatTurn, SendRequest, ConfirmRequest, SessionView  # noqa: F401
from models.intent import InstallRequest, IncidentStatus, AnalyticsQuery, GenericTicket, Intent  # noqa: F401
from models.payload import ChartSpec, ResponsePayload  # noqa: F401
from models.dispatch import PendingConfirmation, DispatchResult, ConfirmationOutcome  # noqa: F401
