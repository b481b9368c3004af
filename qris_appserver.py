# Developed in Oct 2026.
# Purpose: JSON API around the QRIS converter: convert static QRIS codes into
# dynamic ones, validate QRIS codes and compute CRC16 checksums.

import argparse
import base64
import os

import yaml
from flask import Flask, jsonify, request
from flask_cors import CORS
from jsonschema import Draft7Validator, ValidationError
import referencing
from referencing.jsonschema import DRAFT7

from qris_converter import QRISError, generate_dynamic_qris, validate_qris
from qris_crc import calculate_crc
from qris_generator import render_qr_png

# --- CONFIGURATION ---
PORT = 5010
HOST = "127.0.0.1"
SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schema", "openapi.yaml")
SCHEMA_URI = "http://qris/openapi.yaml"

app = Flask(__name__)
CORS(app)


def validate_against_schema(data, schema_name):
    """Validates JSON against the OpenAPI schema.

    Returns None when the data conforms (or no schema file is available),
    otherwise the validation error message.
    """
    if not os.path.exists(SCHEMA_PATH):
        return None
    with open(SCHEMA_PATH, 'r') as f:
        schema = yaml.safe_load(f)

    target_schema = {"$ref": f"{SCHEMA_URI}#/components/schemas/{schema_name}"}

    # Registry over the whole document so internal $refs resolve
    resource = referencing.Resource.from_contents(schema, default_specification=DRAFT7)
    registry = referencing.Registry().with_resource(uri=SCHEMA_URI, resource=resource)

    try:
        Draft7Validator(target_schema, registry=registry).validate(data)
    except ValidationError as e:
        print(f"QRIS_APPSERVER: [!] Schema Validation Error ({schema_name}): {e.message}")
        return e.message
    return None


def error_response(message, code, status=400):
    return jsonify({"error": message, "code": code}), status


@app.route('/convert', methods=['POST'])
def convert_qris():
    """
    Receives a static QRIS with amount and optional fee and returns the
    dynamic QRIS, optionally with a base64 PNG rendering of it.
    """
    data = request.get_json(silent=True)
    if data is None:
        print("QRIS_APPSERVER: [!] Received invalid JSON payload")
        return error_response("Invalid JSON", "INVALID_JSON")

    print("QRIS_APPSERVER: [*] Received convert request")

    schema_error = validate_against_schema(data, "ConvertRequest")
    if schema_error:
        return error_response(schema_error, "SCHEMA_VIOLATION")

    try:
        qris_dynamic = generate_dynamic_qris(
            data["qrisStatic"],
            data["amount"],
            fee_kind=data.get("feeKind", "percentage"),
            fee=data.get("fee", "0"),
        )
    except QRISError as e:
        print(f"QRIS_APPSERVER: [!] Conversion failed: {e}")
        return error_response(str(e), e.code)

    response = {
        "qrisDynamic": qris_dynamic,
        "crc": qris_dynamic[-4:],
    }
    if data.get("includeImage"):
        response["qrImage"] = base64.b64encode(render_qr_png(qris_dynamic)).decode("ascii")

    print(f"QRIS_APPSERVER: [OK] Generated dynamic QRIS with CRC {response['crc']}")
    return jsonify(response)


@app.route('/validate', methods=['POST'])
def validate_payload():
    """Returns the full validation report of a QRIS; never fails on a bad QRIS."""
    data = request.get_json(silent=True)
    if data is None:
        print("QRIS_APPSERVER: [!] Received invalid JSON payload")
        return error_response("Invalid JSON", "INVALID_JSON")

    schema_error = validate_against_schema(data, "ValidateRequest")
    if schema_error:
        return error_response(schema_error, "SCHEMA_VIOLATION")

    result = validate_qris(data["qris"])
    status = "[OK]" if result.valid else "[!]"
    print(f"QRIS_APPSERVER: {status} Validated QRIS, {len(result.errors)} error(s)")
    return jsonify({"valid": result.valid, "errors": result.errors})


@app.route('/crc', methods=['GET'])
def compute_crc():
    data = request.args.get("data")
    if data is None:
        return error_response("Missing data parameter", "MISSING_DATA")
    return jsonify({"crc": calculate_crc(data)})


def main(argv=None):
    parser = argparse.ArgumentParser(description="QRIS App Server")
    parser.add_argument("--host", default=HOST, help="Interface to bind")
    parser.add_argument("--port", type=int, default=PORT, help="Port to listen on")
    args = parser.parse_args(argv)

    print(f"QRIS_APPSERVER: Starting App Server on port {args.port}...")
    app.run(host=args.host, port=args.port)


if __name__ == '__main__':
    main()

