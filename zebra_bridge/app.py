"""
Zebra Bridge - HTTP Application
===============================

Browser Print compatible endpoints in front of one Bluetooth printer.

Every response, errors and preflight included, carries permissive CORS
headers: the callers are browser pages served from another origin.
"""

import logging
from typing import Optional

from flask import Flask, Blueprint, request, jsonify, current_app
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from . import __version__
from .config import PORT, SERVICE_NAME, CONNECTION_TYPE, DEFAULT_PRINTER_NAME
from .connection import PrinterLink
from .dispatcher import JobDispatcher
from .models import (
    StatusResponse,
    PrintAcceptedResponse,
    FailureResponse,
    PrinterInfo,
    AvailableResponse,
    DefaultPrinterResponse,
    HealthResponse,
    ErrorResponse,
)

logger = logging.getLogger(__name__)

CORS_METHODS = ['GET', 'POST', 'OPTIONS']
CORS_ALLOW_HEADERS = ['Content-Type', 'Accept']

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': ', '.join(CORS_METHODS),
    'Access-Control-Allow-Headers': ', '.join(CORS_ALLOW_HEADERS),
}

bridge = Blueprint('bridge', __name__)


def _link() -> PrinterLink:
    return current_app.config['PRINTER_LINK']


def _dispatcher() -> JobDispatcher:
    return current_app.config['DISPATCHER']


# =============================================================================
# Status & Discovery (Browser Print compatibility)
# =============================================================================

@bridge.route('/status', methods=['GET'])
@bridge.route('/api/status', methods=['GET'])
def printer_status():
    """Connection status of the printer (in-memory, no printer I/O)."""
    status = _link().current_state()
    return jsonify(StatusResponse.from_status(status).to_dict())


@bridge.route('/available', methods=['GET'])
@bridge.route('/api/available', methods=['GET'])
def printer_available():
    """Whether a printer is configured (not whether it is reachable)."""
    link = _link()
    printer = PrinterInfo(address=link.address, type=CONNECTION_TYPE) if link.is_configured else None
    return jsonify(AvailableResponse(available=link.is_configured, printer=printer).to_dict())


@bridge.route('/default', methods=['GET'])
@bridge.route('/api/default', methods=['GET'])
def default_printer():
    """Default printer as reported by Browser Print."""
    link = _link()
    if not link.is_configured:
        body = DefaultPrinterResponse(available=False, error='No printer configured')
    else:
        body = DefaultPrinterResponse(
            available=True,
            name=current_app.config['PRINTER_NAME'],
            address=link.address,
            connection=CONNECTION_TYPE,
        )
    return jsonify(body.to_dict())


@bridge.route('/health', methods=['GET'])
@bridge.route('/', methods=['GET'])
def health():
    return jsonify(HealthResponse(
        service=SERVICE_NAME,
        version=__version__,
        port=current_app.config['BRIDGE_PORT'],
    ).to_dict())


# =============================================================================
# Printing
# =============================================================================

def _extract_payload() -> bytes:
    """
    Print data from the request body.

    Accepts ``{"data": "<CPCL/ZPL>"}``; anything else (raw CPCL/ZPL, invalid
    JSON, missing, non-string or unencodable ``data``) is sent as the raw body.
    """
    body = request.get_data()
    data = request.get_json(force=True, silent=True)
    if isinstance(data, dict) and isinstance(data.get('data'), str):
        try:
            return data['data'].encode('utf-8')
        except UnicodeEncodeError:
            logger.warning("Print data is not valid UTF-8, sending raw body")
    return body


@bridge.route('/print', methods=['POST'])
@bridge.route('/api/print', methods=['POST'])
def submit_print():
    """
    Submit a print job.

    Fire-and-forget: the response only confirms the job was queued. Printer
    errors are logged by the dispatcher and never reach the caller.
    """
    try:
        payload = _extract_payload()
        job_id = _dispatcher().submit(payload, source_ip=request.remote_addr)
    except Exception as e:
        logger.exception("Error handling print request")
        return jsonify(FailureResponse(error=str(e)).to_dict()), 500

    logger.debug("Print request accepted as %s (%d bytes)", job_id, len(payload))
    return jsonify(PrintAcceptedResponse().to_dict())


# =============================================================================
# Application Setup
# =============================================================================

def create_app(link: PrinterLink, dispatcher: JobDispatcher, port: int = PORT,
               printer_name: Optional[str] = None) -> Flask:
    """Build the Flask app around an existing printer link and dispatcher."""
    app = Flask(__name__)
    app.config.update(
        PRINTER_LINK=link,
        DISPATCHER=dispatcher,
        BRIDGE_PORT=port,
        PRINTER_NAME=printer_name or DEFAULT_PRINTER_NAME,
    )
    app.register_blueprint(bridge)

    @app.before_request
    def _log_and_preflight():
        logger.debug("HTTP Request: %s %s", request.method, request.path)
        if request.method == 'OPTIONS':
            return app.response_class('', status=200, mimetype='text/plain')

    @app.after_request
    def _cors_headers(response):
        for name, value in CORS_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    CORS(app, origins='*', send_wildcard=True, methods=CORS_METHODS, allow_headers=CORS_ALLOW_HEADERS)

    @app.errorhandler(404)
    @app.errorhandler(405)
    def _endpoint_not_found(e):
        return jsonify(ErrorResponse(error='Endpoint not found').to_dict()), 404

    @app.errorhandler(Exception)
    def _handler_fault(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error serving %s %s", request.method, request.path)
        return jsonify(FailureResponse(error=str(e)).to_dict()), 500

    return app
