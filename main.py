import argparse
import asyncio
import sys

from config.config import load_settings
from logbeacon_logging.core.error_enhancer import ErrorEnhancer
from logbeacon_logging.core.logger_factory import LoggerFactory
from logbeacon_logging.core.performance_tracker import PerformanceTracker
from pipeline.log_pipeline import LogPipeline
from tools.collaborators import StaticLocation
from tools.transport import ConsoleTransport, HttpTransport


def parse_arguments(argv=None):
    """
    Parse command-line arguments for the LogBeacon demo.

    Returns:
        argparse.Namespace: Parsed command-line arguments
    """
    parser = argparse.ArgumentParser(
        description="LogBeacon - ship a sample of structured log records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration is read from LOGBEACON_* environment variables (or a .env file).

Examples:
  python main.py --dry-run
  python main.py --user alice --url https://app.example.com/orders
        """
    )
    parser.add_argument("--dry-run", action="store_true",
                        help="Print records locally instead of sending them")
    parser.add_argument("--user", default=None, help="User id to attach to the records")
    parser.add_argument("--url", default="", help="Value for the url field")
    parser.add_argument("--verbose", choices=["minimal", "normal", "verbose", "debug"], default=None,
                        help="Internal log verbosity (overrides LOGBEACON_VERBOSE)")
    return parser.parse_args(argv)


def _raise_sample_error():
    raise ValueError("sample failure raised by the LogBeacon demo")


async def ship_samples(pipeline: LogPipeline) -> None:
    pipeline.log_information("LogBeacon demo started")
    with PerformanceTracker("sample_request", pipeline.logger) as tracker:
        await asyncio.sleep(0.01)
    pipeline.log_http_info("GET /api/orders 200", round(tracker.elapsed_ms, 2), "/api/orders")
    pipeline.log_http_error("GET /api/orders/42 timed out", "/api/orders/42", "corr-demo-1")
    pipeline.log_warning_message("Cache miss ratio above threshold")

    try:
        _raise_sample_error()
    except ValueError as e:
        record = await pipeline.log_error(e)
        pipeline.logger.info("Captured error shipped", extra={"level": record.level.value})


def main(argv=None) -> int:
    args = parse_arguments(argv)
    settings = load_settings()

    factory = LoggerFactory()
    factory.set_verbose_level(args.verbose or settings.verbose)
    logger = factory.get_logger("logbeacon.main")

    transport = ConsoleTransport() if args.dry_run else HttpTransport(app_name=settings.app_name)
    logger.info("Starting LogBeacon demo", extra={
        "transport": type(transport).__name__,
        "verbose_level": factory.get_verbose_level(),
        "log_endpoint": settings.log_endpoint,
        "environment": settings.environment
    })

    try:
        pipeline = LogPipeline.from_settings(settings, transport, location=StaticLocation(args.url))
        if args.user:
            pipeline.on_user_changed(args.user)
        asyncio.run(ship_samples(pipeline))
    except Exception as e:
        ErrorEnhancer.log_error(logger, e, context={"operation": "ship_samples"})
        return 1
    finally:
        if isinstance(transport, HttpTransport):
            transport.close()
            logger.info("Transport closed", extra={"sent": transport.sent, "failed": transport.failed})
        factory.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
