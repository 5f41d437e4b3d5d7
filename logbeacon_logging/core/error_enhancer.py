"""
Error Enhancer Module

Writes exceptions with context and a readable traceback to a local logger.
This is the diagnostic sink for errors that must not be shipped remotely
as-is.
"""

import logging
import traceback
from pathlib import Path
from typing import Any, Dict, Optional


class ErrorEnhancer:
    """
    Utility class for enhanced error logging with context and stack traces.
    """

    @staticmethod
    def log_error(
        logger: logging.Logger,
        error: BaseException,
        context: Optional[Dict[str, Any]] = None,
        include_stack_trace: bool = True,
        log_level: int = logging.ERROR
    ) -> None:
        """
        Log an error with enhanced context and stack trace information.

        Args:
            logger: Logger instance to use for logging
            error: The exception that occurred
            context: Additional context information
            include_stack_trace: Whether to include the traceback
            log_level: Logging level to use
        """
        error_message = f"Error: {type(error).__name__}: {ErrorEnhancer._render(error)}"

        if context:
            error_message += f"\nContext: {ErrorEnhancer._format_context(context)}"

        if include_stack_trace and error.__traceback__ is not None:
            error_message += f"\nStack Trace:\n{ErrorEnhancer._get_enhanced_stack_trace(error)}"

        logger.log(log_level, error_message, extra={"error_type": type(error).__name__})

    @staticmethod
    def log_transport_error(
        logger: logging.Logger,
        error: BaseException,
        status: Any,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log an error that came back from a failed network call.

        Args:
            logger: Diagnostic logger
            error: The status-bearing exception
            status: Its transport status
            context: Additional context
        """
        enhanced_context: Dict[str, Any] = {"status": status}
        request_info = getattr(error, "request_info", None)
        if request_info is not None:
            enhanced_context["request_url"] = str(getattr(request_info, "real_url", request_info))
        if context:
            enhanced_context.update(context)

        ErrorEnhancer.log_error(
            logger=logger,
            error=error,
            context=enhanced_context,
            include_stack_trace=True,
            log_level=logging.ERROR
        )

    @staticmethod
    def _render(error: BaseException) -> str:
        try:
            return str(error)
        except Exception:
            return f"<unprintable {type(error).__name__}>"

    @staticmethod
    def _format_context(context: Dict[str, Any]) -> str:
        formatted_items = []
        for key, value in context.items():
            if isinstance(value, (dict, list)):
                formatted_items.append(f"{key}={value}")
            else:
                formatted_items.append(f"{key}={value!r}")
        return ", ".join(formatted_items)

    @staticmethod
    def _get_enhanced_stack_trace(error: BaseException) -> str:
        """
        Format the traceback, shortening file paths under the working directory.

        Args:
            error: The exception

        Returns:
            Formatted stack trace
        """
        tb_lines = traceback.format_exception(type(error), error, error.__traceback__)
        cwd = Path.cwd()

        enhanced_lines = []
        for line in tb_lines:
            if 'File "' in line:
                parts = line.split('"')
                if len(parts) >= 2:
                    try:
                        relative_path = Path(parts[1]).relative_to(cwd)
                        line = line.replace(parts[1], str(relative_path))
                    except ValueError:
                        pass  # outside the project, keep absolute
            enhanced_lines.append(line.rstrip())

        return "\n".join(enhanced_lines)
