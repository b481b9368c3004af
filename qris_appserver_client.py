# Developed in Oct 2026.
# Purpose: Command-line client for a running qris_appserver.py.

import argparse
import json
import os

import requests

PORT = 5010
HOST = "127.0.0.1"
BASE_URL = f"http://{HOST}:{PORT}"


def print_response(response):
    print(f"QRIS_APPSERVER_CLIENT: [*] Status Code: {response.status_code}")
    try:
        resp_json = response.json()
        print("QRIS_APPSERVER_CLIENT: [*] Response Body:")
        print(json.dumps(resp_json, indent=4))
        return resp_json
    except json.JSONDecodeError:
        print("QRIS_APPSERVER_CLIENT: [*] Response Body (Text):")
        print(response.text)
        return None


def read_qris_input(qris_input):
    """Returns the QRIS content from a file path, or the argument itself."""
    if os.path.exists(qris_input):
        with open(qris_input, 'r') as f:
            qris = f.read().strip()
        print(f"QRIS_APPSERVER_CLIENT: [*] Loaded QRIS content from file: {qris_input}")
        return qris
    print("QRIS_APPSERVER_CLIENT: [*] Using provided QRIS content string")
    return qris_input


def check_convert(request_path, base_url=BASE_URL):
    """Sends a ConvertRequest JSON file to /convert, then checks the result via /validate."""
    if not os.path.exists(request_path):
        print(f"QRIS_APPSERVER_CLIENT: [!] Error: Request file '{request_path}' not found.")
        return None

    try:
        with open(request_path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        print(f"QRIS_APPSERVER_CLIENT: [!] Error decoding JSON from '{request_path}': {e}")
        return None

    url = f"{base_url}/convert"
    print(f"QRIS_APPSERVER_CLIENT: [*] Sending POST request to {url} with request: {request_path}")

    try:
        response = requests.post(url, json=data)
    except requests.exceptions.ConnectionError:
        print(f"QRIS_APPSERVER_CLIENT: [!] Error: Could not connect to {url}. Is qris_appserver.py running?")
        return None

    resp_json = print_response(response)
    if response.status_code == 200 and resp_json:
        return check_validate(resp_json["qrisDynamic"], base_url=base_url)
    return resp_json


def check_validate(qris_input, base_url=BASE_URL):
    qris = read_qris_input(qris_input)
    url = f"{base_url}/validate"
    print(f"QRIS_APPSERVER_CLIENT: [*] Sending POST request to {url}")

    try:
        response = requests.post(url, json={"qris": qris})
    except requests.exceptions.ConnectionError:
        print(f"QRIS_APPSERVER_CLIENT: [!] Error: Could not connect to {url}. Is qris_appserver.py running?")
        return None

    return print_response(response)


def check_crc(data, base_url=BASE_URL):
    url = f"{base_url}/crc"
    print(f"QRIS_APPSERVER_CLIENT: [*] Sending GET request to {url}")

    try:
        response = requests.get(url, params={"data": data})
    except requests.exceptions.ConnectionError:
        print(f"QRIS_APPSERVER_CLIENT: [!] Error: Could not connect to {url}. Is qris_appserver.py running?")
        return None

    return print_response(response)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Client for QRIS App Server")
    parser.add_argument("--convert", help="Path to a ConvertRequest JSON file")
    parser.add_argument("--validate", help="QRIS content string or path to file containing QRIS content")
    parser.add_argument("--crc", help="Text to compute the CRC16 checksum of")
    parser.add_argument("--base-url", default=BASE_URL, help="App server base URL")

    args = parser.parse_args()

    if args.convert:
        check_convert(args.convert, base_url=args.base_url)
    elif args.validate:
        check_validate(args.validate, base_url=args.base_url)
    elif args.crc is not None:
        check_crc(args.crc, base_url=args.base_url)
    else:
        parser.print_help()
