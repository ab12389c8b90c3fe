"""
Reservations - Room reservation consistency service
Flask application factory and initialization
"""

import os
import json
import click
import logging
from flask import Flask
from flask.cli import AppGroup
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import room_registry

# Import database functions
from database import close_db, init_db


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    config_class = config[config_name]
    if hasattr(config_class, 'validate'):
        config_class.validate()
    app.config.from_object(config_class)

    # Initialize extensions
    initialize_extensions(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    room_registry.init_app(app)


def echo_json(document):
    """Print a response document as JSON."""
    click.echo(json.dumps(document, indent=2, sort_keys=True))


def fail(errors, **extra_fields):
    """Print an error document and exit with status 1."""
    from utils.api_response import api_error

    echo_json(api_error(errors, **extra_fields))
    click.get_current_context().exit(1)


def register_cli_commands(app):
    """Register Flask CLI commands."""
    from services import get_reservation_service, get_health_checker
    from utils.api_response import api_success
    from utils.errors import ErrorDetail, ReservationError, RESERVATION_NOT_FOUND
    from utils.messages import get_message
    from utils.validators import (
        parse_date, parse_uuid, parse_optional_date, parse_optional_uuid
    )

    @app.cli.command('init-db')
    @click.option('--reset', is_flag=True, help='Drop existing reservations first.')
    def init_db_command(reset):
        """Create the reservation schema."""
        click.echo('Initializing database...')
        init_db(reset=reset)
        click.echo('Database initialized successfully!')

    reservations_cli = AppGroup('reservations', help='Manage room reservations.')

    @reservations_cli.command('list')
    @click.option('--include-deleted', is_flag=True, help='Include soft-deleted reservations.')
    @click.option('--room-id', default=None, help='Only reservations of this room.')
    @click.option('--before', default=None, help='Only reservations starting on or before (YYYY-MM-DD).')
    @click.option('--after', default=None, help='Only reservations ending on or after (YYYY-MM-DD).')
    def list_command(include_deleted, room_id, before, after):
        """List reservations."""
        try:
            reservations = get_reservation_service().list_reservations(
                include_deleted=include_deleted,
                room_id=parse_optional_uuid(room_id, 'room_id'),
                before=parse_optional_date(before, 'before'),
                after=parse_optional_date(after, 'after'),
            )
        except ReservationError as e:
            fail(e.errors)
        echo_json({'reservations': [r.to_dict() for r in reservations]})

    @reservations_cli.command('show')
    @click.argument('reservation_id')
    def show_command(reservation_id):
        """Show one reservation (including soft-deleted)."""
        try:
            reservation = get_reservation_service().get_reservation(
                parse_uuid(reservation_id, 'id')
            )
        except ReservationError as e:
            fail(e.errors)
        if reservation is None:
            fail([ErrorDetail(RESERVATION_NOT_FOUND, get_message('reservation_not_found'))])
        echo_json(reservation.to_dict())

    @reservations_cli.command('create')
    @click.argument('room_id')
    @click.argument('from_date')
    @click.argument('to_date')
    def create_command(room_id, from_date, to_date):
        """Create a reservation for ROOM_ID on [FROM_DATE, TO_DATE)."""
        try:
            reservation = get_reservation_service().create_reservation(
                parse_uuid(room_id, 'room_id'),
                parse_date(from_date, 'from'),
                parse_date(to_date, 'to'),
            )
        except ReservationError as e:
            fail(e.errors)
        echo_json(api_success(
            data=reservation.to_dict(),
            message=get_message('reservation_created')
        ))

    @reservations_cli.command('put')
    @click.argument('reservation_id')
    @click.argument('room_id')
    @click.argument('from_date')
    @click.argument('to_date')
    def put_command(reservation_id, room_id, from_date, to_date):
        """Replace reservation RESERVATION_ID, creating it if absent."""
        try:
            created, reservation = get_reservation_service().upsert_reservation(
                parse_uuid(reservation_id, 'id'),
                parse_uuid(room_id, 'room_id'),
                parse_date(from_date, 'from'),
                parse_date(to_date, 'to'),
            )
        except ReservationError as e:
            fail(e.errors)
        message_key = 'reservation_created' if created else 'reservation_replaced'
        echo_json(api_success(
            data=reservation.to_dict(),
            message=get_message(message_key),
            created=created
        ))

    @reservations_cli.command('delete')
    @click.argument('reservation_id')
    @click.option('--permanent', is_flag=True, help='Remove the record instead of soft-deleting.')
    def delete_command(reservation_id, permanent):
        """Delete a reservation."""
        try:
            reservation = get_reservation_service().delete_reservation(
                parse_uuid(reservation_id, 'id'),
                permanent=permanent
            )
        except ReservationError as e:
            fail(e.errors)
        message_key = 'reservation_deleted_permanently' if permanent else 'reservation_deleted'
        echo_json(api_success(
            data={'id': str(reservation.id)},
            message=get_message(message_key)
        ))

    app.cli.add_command(reservations_cli)

    health_cli = AppGroup('health', help='Dependency health checks.')

    @health_cli.command('live')
    def live_command():
        """Liveness probe."""
        echo_json({'live': get_health_checker().liveness()})

    @health_cli.command('ready')
    def ready_command():
        """Readiness probe (room registry and store)."""
        result = get_health_checker().readiness()
        if result['ready']:
            echo_json({'ready': True, 'detail': result['detail']})
            return
        fail(
            [ErrorDetail(e['code'], e['message'], e.get('more_info')) for e in result['errors']],
            trace=result['trace'],
            ready=False,
            detail=result['detail']
        )

    app.cli.add_command(health_cli)

    @app.cli.command('status')
    def status_command():
        """Show service authors and API version."""
        echo_json(get_health_checker().status())


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of the app context."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/reservations.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Reservations startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)
