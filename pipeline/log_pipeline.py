import asyncio
import json
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel

from logbeacon_logging.core.error_enhancer import ErrorEnhancer
from logbeacon_logging.core.logger_factory import LoggerFactory
from pipeline.exceptions import PipelineNotInitializedError, RemoteLoggedError
from schemas.log_schemas import FieldValue, LogLevel, LogRecord, PipelineConfig
from tools.collaborators import (
    BrowserIdentity,
    LocationProvider,
    PlatformBrowserIdentity,
    SessionProvider,
    StaticLocation,
    UuidSessionProvider,
)
from tools.field_enricher import FieldEnricher, LogContext
from tools.severity_tool import FIRST_PARTY_MARKER, SeverityClassifier
from tools.stack_trace_tool import StackTraceResolver
from tools.transport import Transport


def normalize_message(message: Any) -> str:
    """
    Render any logged payload as text.

    Strings pass through, pydantic models and JSON-able containers are
    serialized, everything else goes through ``str``.
    """
    if isinstance(message, str):
        return message
    if isinstance(message, BaseModel):
        return message.model_dump_json()
    if isinstance(message, (dict, list, tuple)):
        return json.dumps(message, default=str, ensure_ascii=False)
    return str(message)


def format_error_trace(message: str, stack: str) -> str:
    return f"Error message:\n{message}.\nStack trace: {stack}"


def error_message(error: BaseException) -> str:
    """Text of ``error``, or its type name when it is empty or cannot be rendered."""
    try:
        text = str(error)
    except Exception:
        text = ""
    return text or type(error).__name__


def error_status(error: BaseException) -> Any:
    """The ``status`` a failed network call attaches to its error; None if absent or unreadable."""
    try:
        return getattr(error, "status", None)
    except Exception:
        return None


class LogPipeline:
    """
    Entry point for application logging.

    Every leveled operation builds one LogRecord (level, normalized message,
    enriched fields) and hands it to the transport. ``initialize`` must run
    before any of them; until then they raise PipelineNotInitializedError.
    """

    def __init__(
        self,
        transport: Transport,
        session_provider: Optional[SessionProvider] = None,
        browser_identity: Optional[BrowserIdentity] = None,
        location: Optional[LocationProvider] = None,
        stack_trace_resolver: Optional[StackTraceResolver] = None,
        severity_classifier: Optional[SeverityClassifier] = None,
    ):
        self.logger = LoggerFactory().get_logger("logbeacon.pipeline")
        self.diagnostics = LoggerFactory().get_logger("logbeacon.diagnostics")

        self.transport = transport
        self.location = location or StaticLocation()
        self.context = LogContext()
        self.enricher = FieldEnricher(
            self.context,
            session_provider or UuidSessionProvider(),
            browser_identity or PlatformBrowserIdentity()
        )
        self.resolver = stack_trace_resolver or StackTraceResolver()
        self.classifier = severity_classifier or SeverityClassifier()
        self._config: Optional[PipelineConfig] = None

        self.logger.debug("LogPipeline created", extra={"browser": self.enricher.browser})

    @classmethod
    def from_settings(cls, settings, transport: Transport, **collaborators) -> "LogPipeline":
        """
        Build and initialize a pipeline from loaded Settings.

        Args:
            settings: ``config.config.Settings`` instance
            transport: Delivery collaborator
            **collaborators: Overrides passed to the constructor
        """
        collaborators.setdefault("stack_trace_resolver", StackTraceResolver(timeout=settings.resolve_timeout))
        collaborators.setdefault("severity_classifier", SeverityClassifier(
            first_party_marker=settings.first_party_marker or FIRST_PARTY_MARKER
        ))
        pipeline = cls(transport, **collaborators)
        pipeline.add_warning_sentences(settings.warning_sentences)
        pipeline.initialize(settings.to_pipeline_config())
        return pipeline

    # -- state -----------------------------------------------------------

    def initialize(self, config: PipelineConfig) -> None:
        if self._config is not None:
            self.logger.info("Re-initializing LogPipeline; previous configuration replaced", extra={
                "previous_app_name": self._config.app_name,
                "app_name": config.app_name
            })
        self._config = config
        self.context.environment = config.environment
        self.logger.info("LogPipeline initialized", extra={
            "app_name": config.app_name,
            "log_endpoint": config.log_endpoint,
            "environment": config.environment
        })

    @property
    def config(self) -> Optional[PipelineConfig]:
        return self._config

    @property
    def is_ready(self) -> bool:
        return self._config is not None

    def on_user_changed(self, user_id: Optional[str]) -> None:
        self.context.user_id = user_id
        self.logger.debug("User changed", extra={"user_id": user_id})

    def add_warning_sentence(self, sentence: str) -> None:
        self.classifier.add_warning_sentence(sentence)

    def add_warning_sentences(self, sentences: Iterable[str]) -> None:
        for sentence in sentences:
            self.classifier.add_warning_sentence(sentence)

    # -- leveled operations ----------------------------------------------

    def log_information(self, message: Any, call_fields: Optional[Mapping[str, FieldValue]] = None) -> LogRecord:
        fields = self._default_call_fields()
        if call_fields:
            fields.update(call_fields)
        return self._emit(LogLevel.INFORMATION, message, fields, "log_information")

    def log_http_info(self, info: Any, elapsed_time: float, request_path: str) -> LogRecord:
        fields = {
            "requestPath": request_path,
            "elapsedTime": elapsed_time,
            "url": self.location.href,
        }
        return self._emit(LogLevel.INFORMATION, info, fields, "log_http_info")

    def log_http_error(self, error_msg: Any, request_path: str, correlation_id: str) -> LogRecord:
        fields = {
            "requestPath": request_path,
            "url": self.location.href,
            "correlationId": correlation_id,
        }
        return self._emit(LogLevel.ERROR, error_msg, fields, "log_http_error")

    def log_error_message(self, message: Any) -> LogRecord:
        return self._emit(LogLevel.ERROR, message, self._default_call_fields(), "log_error_message")

    def log_warning_message(self, message: Any) -> LogRecord:
        return self._emit(LogLevel.WARNING, message, self._default_call_fields(), "log_warning_message")

    async def log_error(self, error: BaseException) -> LogRecord:
        """
        Resolve, classify and ship a raised error.

        The work runs in its own task and is shielded, so cancelling the
        caller does not stop the record from being emitted.
        """
        self._require_config("log_error")
        task = asyncio.ensure_future(self._log_error(error))
        task.add_done_callback(self._report_failed_log_error)
        return await asyncio.shield(task)

    def _report_failed_log_error(self, task: "asyncio.Future[LogRecord]") -> None:
        # Reading the exception here also keeps a cancelled caller from leaving it unretrieved.
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error(f"log_error could not emit its record: {exc!r}", extra={
                "error_type": type(exc).__name__
            })

    async def _log_error(self, error: BaseException) -> LogRecord:
        stack = await self.resolver.resolve(error)
        message = error_message(error)
        error_trace = format_error_trace(message, stack)

        level = self.classifier.classify(error_trace)

        status = error_status(error)
        if status:
            # Keep the full network error local; only its message goes remote.
            ErrorEnhancer.log_transport_error(self.diagnostics, error, status)
            error = RemoteLoggedError(message)

        self.logger.debug("Captured error classified", extra={
            "level": level.value,
            "error_type": type(error).__name__,
            "trace_resolved": bool(stack)
        })

        if level is LogLevel.WARNING:
            return self.log_warning_message(error_trace)
        return self.log_error_message(error_trace)

    # -- internals -------------------------------------------------------

    def _default_call_fields(self) -> dict:
        return {
            "requestPath": "",
            "elapsedTime": 0,
            "url": self.location.href,
        }

    def _require_config(self, operation: str) -> PipelineConfig:
        if self._config is None:
            raise PipelineNotInitializedError(operation)
        return self._config

    def _emit(self, level: LogLevel, message: Any, call_fields: Mapping[str, FieldValue], operation: str) -> LogRecord:
        config = self._require_config(operation)
        record = LogRecord(
            level=level,
            message=normalize_message(message),
            fields=self.enricher.enrich(call_fields)
        )
        self.transport.send(config.log_endpoint, record)
        return record
