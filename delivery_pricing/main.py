"""Command-line entry point for the delivery pricing service."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from delivery_pricing.config.environment import EnvironmentConfig
from delivery_pricing.config.exceptions import ConfigurationError
from delivery_pricing.config.loader import load_config
from delivery_pricing.config.models import AppConfig
from delivery_pricing.domain.models import Address
from delivery_pricing.logging import get_logger
from delivery_pricing.logging.config import configure_logging
from delivery_pricing.matching import MatchResult, ZoneMatcher
from delivery_pricing.persistence import (
    AddressLookup,
    AddressNotFoundError,
    DatabaseAddressLookup,
    InMemoryAddressRepository,
    close_database,
    init_database,
)
from delivery_pricing.quoting import ConfirmedPrice, InvalidPriceError, QuoteService
from delivery_pricing.zones import ZoneCatalog, load_zone_catalog

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_REJECTED = 2


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load and prepare runtime configuration.

    Args:
        config_path: Path to configuration file, or None for the default lookup
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with the effective log level set

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    # Log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def build_address_lookup(app_config: AppConfig, env_config: EnvironmentConfig) -> AddressLookup:
    """Use the SQL store when DATABASE_URL is set, otherwise the seeded in-memory store."""
    if env_config.database_url:
        init_database(env_config.database_url)
        return DatabaseAddressLookup()

    return InMemoryAddressRepository(
        Address(id=seed.id, owner_id=seed.owner_id, text=seed.text)
        for seed in app_config.addresses
    )


def build_quote_service(
    app_config: AppConfig, env_config: EnvironmentConfig
) -> Tuple[QuoteService, ZoneCatalog]:
    """Load the zone catalog and wire the matcher and address store into a QuoteService.

    Raises:
        CatalogLoadError: If the zone catalog cannot be loaded
        DatabaseConnectionError: If DATABASE_URL points at an unusable database
    """
    catalog = load_zone_catalog(app_config.zones_file)
    matcher = ZoneMatcher(catalog)
    address_lookup = build_address_lookup(app_config, env_config)

    logger.info(
        "Services initialized",
        extra={
            "event": "services.initialized",
            "zone_count": len(catalog),
            "address_store": "database" if env_config.database_url else "memory",
        },
    )
    return QuoteService(matcher, address_lookup), catalog


def _emit(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, ensure_ascii=False))


def _resolve_owner(args: argparse.Namespace, app_config: AppConfig) -> Optional[str]:
    owner = (args.owner or "").strip()
    return owner or app_config.default_owner_id


def run_check_zones(catalog: ZoneCatalog, app_config: AppConfig) -> int:
    _emit(
        {
            "status": "ok",
            "source": str(app_config.zones_file),
            "zones": len(catalog),
            "keywords": len(catalog.entries),
        }
    )
    return EXIT_OK


def run_estimate(service: QuoteService, owner_id: str, address_id: str) -> int:
    try:
        result = service.estimate(owner_id, address_id)
    except AddressNotFoundError as e:
        _emit({"error": "address_not_found", "message": str(e)})
        return EXIT_REJECTED

    _emit(result.to_dict())
    return EXIT_OK if isinstance(result, MatchResult) else EXIT_REJECTED


def run_confirm(service: QuoteService, owner_id: str, address_id: str, client_price: int) -> int:
    try:
        result = service.confirm_order(owner_id, address_id, client_price)
    except InvalidPriceError as e:
        _emit({"error": "validation_error", "message": str(e)})
        return EXIT_REJECTED
    except AddressNotFoundError as e:
        _emit({"error": "address_not_found", "message": str(e)})
        return EXIT_REJECTED

    _emit(result.to_dict())
    return EXIT_OK if isinstance(result, ConfirmedPrice) else EXIT_REJECTED


def run_serve(service: QuoteService, app_config: AppConfig, host: Optional[str], port: Optional[int]) -> int:
    import uvicorn

    from delivery_pricing.api import create_app

    app = create_app(service, default_owner_id=app_config.default_owner_id)
    bind_host = host or app_config.api.host
    bind_port = port or app_config.api.port

    logger.info(
        f"Serving on {bind_host}:{bind_port}",
        extra={"event": "service.serving", "host": bind_host, "port": bind_port},
    )
    # log_config=None keeps the handlers installed by configure_logging()
    uvicorn.run(app, host=bind_host, port=bind_port, log_config=None)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="delivery-pricing",
        description="Delivery Pricing - zone matching, estimates and order price confirmation",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("check-zones", help="Load and validate the zone catalog")

    estimate = subparsers.add_parser("estimate", help="Estimate the delivery price for an address")
    estimate.add_argument("--owner", default=None, help="Owning user (default: default_owner_id)")
    estimate.add_argument("--address", required=True, help="Address identifier")

    confirm = subparsers.add_parser("confirm", help="Confirm a client price for an address")
    confirm.add_argument("--owner", default=None, help="Owning user (default: default_owner_id)")
    confirm.add_argument("--address", required=True, help="Address identifier")
    confirm.add_argument("--price", type=int, required=True, help="Client price in minor units")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help="Interface to bind (default: api.host)")
    serve.add_argument("--port", type=int, default=None, help="Port to listen on (default: api.port)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the delivery pricing CLI.

    Returns:
        Exit code: 0 on match/confirmation, 2 on a rejected request
        (no zone, price conflict, unknown address), 1 on configuration
        or startup failure.
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        # Step 1: Load configuration (before logging for format detection)
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        # Step 2: Configure logging; one-shot commands keep stdout for JSON output
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
            stream=sys.stdout if args.command == "serve" else sys.stderr,
        )

        logger.info(
            "Delivery pricing starting",
            extra={
                "event": "service.starting",
                "command": args.command,
                "zones_file": str(app_config.zones_file),
                "log_level": env_config.log_level,
            },
        )

        # Step 3: Wire services
        service, catalog = build_quote_service(app_config, env_config)

        # Step 4: Dispatch
        try:
            if args.command == "check-zones":
                return run_check_zones(catalog, app_config)

            if args.command == "serve":
                return run_serve(service, app_config, args.host, args.port)

            owner_id = _resolve_owner(args, app_config)
            if owner_id is None:
                _emit({"error": "unauthenticated", "message": "Pass --owner or set default_owner_id"})
                return EXIT_REJECTED

            if args.command == "estimate":
                return run_estimate(service, owner_id, args.address)
            return run_confirm(service, owner_id, args.address, args.price)
        finally:
            close_database()
            logger.info(
                "Delivery pricing stopped",
                extra={
                    "event": "service.stopping",
                    "uptime_seconds": round(time.time() - start_time, 2),
                },
            )

    except ConfigurationError as e:
        # Configuration errors are already formatted nicely
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": type(e).__name__},
        )
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return EXIT_OK
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={
                "event": "service.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
