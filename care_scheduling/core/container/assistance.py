# ============================================================================
# SCOPE: DOMAIN
# Description: Container for Assistance domain dependencies.
#              Wires ports, services, use cases and event subscribers.
# ============================================================================
"""
Assistance Domain Container.

Provides dependency injection for the Assistance domain. Ports default to the
in-memory adapters; pass SQLAlchemy adapters (see ``for_session``) or any
other implementation to swap storage.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from care_scheduling.config.settings import Settings, get_settings
from care_scheduling.core.domain import DomainEventPublisher
from care_scheduling.core.shared.logger import configure_logging_from_settings
from care_scheduling.domains.assistance.application.handlers import (
    NotificationHandler,
    RecordProjectionHandler,
)
from care_scheduling.domains.assistance.application.services import (
    AppointmentLifecycleService,
    AppointmentQueryService,
)
from care_scheduling.domains.assistance.application.use_cases import (
    BookAppointmentUseCase,
    CancelAppointmentUseCase,
    CompleteConsultationUseCase,
    ConfirmAppointmentUseCase,
    FindAvailableProfessionalsUseCase,
    GetAppointmentStatisticsUseCase,
    GetAvailableSlotsUseCase,
    MarkNoShowUseCase,
    RescheduleAppointmentUseCase,
    StartConsultationUseCase,
)
from care_scheduling.domains.assistance.domain.events import APPOINTMENT_EVENT_TYPES, AppointmentConfirmed
from care_scheduling.domains.assistance.domain.services import (
    AvailabilityCalculator,
    ConflictDetector,
    SpecializedRecordProjector,
)
from care_scheduling.domains.assistance.infrastructure.notifications import LoggingNotifier
from care_scheduling.domains.assistance.infrastructure.persistence.memory import (
    InMemoryAppointmentStore,
    InMemoryProfessionalDirectory,
    InMemoryTrackingRecordStore,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from care_scheduling.domains.assistance.application.ports import (
        IAppointmentStore,
        INotifier,
        IProfessionalDirectory,
        ITrackingRecordStore,
    )
    from care_scheduling.domains.assistance.infrastructure.persistence.sqlalchemy import (
        SessionScopedRecordProjectionHandler,
    )

logger = logging.getLogger(__name__)


class AssistanceContainer:
    """Container for Assistance domain dependencies.

    Single Responsibility: Wire assistance dependencies.

    Subscriptions made on construction:
    - AppointmentConfirmed -> RecordProjectionHandler
    - every appointment event -> NotificationHandler
    """

    def __init__(
        self,
        settings: Settings | None = None,
        professional_directory: "IProfessionalDirectory | None" = None,
        appointment_store: "IAppointmentStore | None" = None,
        record_store: "ITrackingRecordStore | None" = None,
        notifier: "INotifier | None" = None,
        configure_logs: bool = False,
        session_factory: "async_sessionmaker[AsyncSession] | None" = None,
    ):
        """Initialize container.

        Args:
            settings: Settings (defaults to the cached instance).
            professional_directory: Directory port (in-memory by default).
            appointment_store: Appointment store port (in-memory by default).
            record_store: Tracking record store port (in-memory by default).
            notifier: Notifier port (logging notifier by default).
            configure_logs: Apply LOG_LEVEL / LOG_FORMAT / LOG_FILE to the root logger.
            session_factory: When given, the record projection handler opens its
                own SQLAlchemy session for each event.
        """
        self.settings = settings or get_settings()
        if configure_logs:
            configure_logging_from_settings(self.settings)

        self.professional_directory = professional_directory or InMemoryProfessionalDirectory()
        self.appointment_store = appointment_store or InMemoryAppointmentStore()
        self.record_store = record_store or InMemoryTrackingRecordStore()
        self.notifier = notifier or LoggingNotifier()
        self._session_factory = session_factory

        self.event_publisher = DomainEventPublisher(dispatch_mode=self.settings.EVENT_DISPATCH_MODE)
        self.availability_calculator = AvailabilityCalculator.from_settings(self.settings)
        self.conflict_detector = ConflictDetector()
        self.record_projector = SpecializedRecordProjector()

        self._register_handlers()
        logger.debug(f"AssistanceContainer initialized (dispatch={self.settings.EVENT_DISPATCH_MODE})")

    @classmethod
    def for_session(
        cls,
        session: "AsyncSession",
        settings: Settings | None = None,
        notifier: "INotifier | None" = None,
        session_factory: "async_sessionmaker[AsyncSession] | None" = None,
    ) -> "AssistanceContainer":
        """
        Create a container whose ports are SQLAlchemy repositories on one session.

        ``AsyncSession`` does not allow concurrent use, so background handlers
        need ``session_factory`` to get sessions of their own. Without it,
        dispatch falls back to inline and handlers run on ``session`` in turn.
        """
        from care_scheduling.domains.assistance.infrastructure.persistence.sqlalchemy import (
            SQLAlchemyAppointmentStore,
            SQLAlchemyProfessionalDirectory,
            SQLAlchemyTrackingRecordStore,
        )

        settings = settings or get_settings()
        if session_factory is None and settings.EVENT_DISPATCH_MODE == "background":
            logger.info("No session factory for background handlers, dispatching events inline")
            settings = settings.model_copy(update={"EVENT_DISPATCH_MODE": "inline"})

        return cls(
            settings=settings,
            professional_directory=SQLAlchemyProfessionalDirectory(session),
            appointment_store=SQLAlchemyAppointmentStore(session),
            record_store=SQLAlchemyTrackingRecordStore(session),
            notifier=notifier,
            session_factory=session_factory,
        )

    def _register_handlers(self) -> None:
        self.event_publisher.subscribe(AppointmentConfirmed, self.create_record_projection_handler())
        notification_handler = NotificationHandler(self.notifier)
        for event_type in APPOINTMENT_EVENT_TYPES:
            self.event_publisher.subscribe(event_type, notification_handler)

    # Handlers

    def create_record_projection_handler(self) -> "RecordProjectionHandler | SessionScopedRecordProjectionHandler":
        if self._session_factory is not None:
            from care_scheduling.domains.assistance.infrastructure.persistence.sqlalchemy import (
                SessionScopedRecordProjectionHandler,
            )

            return SessionScopedRecordProjectionHandler(
                self._session_factory,
                projector=self.record_projector,
                event_publisher=self.event_publisher,
            )
        return RecordProjectionHandler(
            appointment_store=self.appointment_store,
            record_store=self.record_store,
            projector=self.record_projector,
            event_publisher=self.event_publisher,
        )

    # Services

    def create_lifecycle_service(self) -> AppointmentLifecycleService:
        """Create the appointment lifecycle service."""
        return AppointmentLifecycleService(
            professional_directory=self.professional_directory,
            appointment_store=self.appointment_store,
            event_publisher=self.event_publisher,
            availability_calculator=self.availability_calculator,
            conflict_detector=self.conflict_detector,
            min_reason_length=self.settings.MIN_REASON_LENGTH,
        )

    def create_query_service(self) -> AppointmentQueryService:
        return AppointmentQueryService(
            appointment_store=self.appointment_store,
            upcoming_window_days=self.settings.UPCOMING_WINDOW_DAYS,
        )

    # Use cases

    def create_book_appointment_use_case(self) -> BookAppointmentUseCase:
        return BookAppointmentUseCase(self.create_lifecycle_service())

    def create_confirm_appointment_use_case(self) -> ConfirmAppointmentUseCase:
        return ConfirmAppointmentUseCase(self.create_lifecycle_service())

    def create_cancel_appointment_use_case(self) -> CancelAppointmentUseCase:
        return CancelAppointmentUseCase(self.create_lifecycle_service())

    def create_reschedule_appointment_use_case(self) -> RescheduleAppointmentUseCase:
        return RescheduleAppointmentUseCase(self.create_lifecycle_service())

    def create_start_consultation_use_case(self) -> StartConsultationUseCase:
        return StartConsultationUseCase(self.create_lifecycle_service())

    def create_complete_consultation_use_case(self) -> CompleteConsultationUseCase:
        return CompleteConsultationUseCase(self.create_lifecycle_service())

    def create_mark_no_show_use_case(self) -> MarkNoShowUseCase:
        return MarkNoShowUseCase(self.create_lifecycle_service())

    def create_get_available_slots_use_case(self) -> GetAvailableSlotsUseCase:
        return GetAvailableSlotsUseCase(
            professional_directory=self.professional_directory,
            appointment_store=self.appointment_store,
            availability_calculator=self.availability_calculator,
        )

    def create_find_available_professionals_use_case(self) -> FindAvailableProfessionalsUseCase:
        return FindAvailableProfessionalsUseCase(
            professional_directory=self.professional_directory,
            appointment_store=self.appointment_store,
            availability_calculator=self.availability_calculator,
        )

    def create_statistics_use_case(self) -> GetAppointmentStatisticsUseCase:
        return GetAppointmentStatisticsUseCase(appointment_store=self.appointment_store)
