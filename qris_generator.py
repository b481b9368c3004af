# Developed in Oct 2026.
# Purpose: Command-line tool that turns a static QRIS into a dynamic QRIS
# (text + PNG image), or reports the validation result of a QRIS.

import argparse
import io
import os
import sys

import qrcode

from qris_converter import (
    FEE_KIND_ALIASES,
    FeeKind,
    QRISError,
    generate_dynamic_qris,
    validate_qris,
)

# --- CONFIGURATION ---
QR_TEXT_FILE = "qrcode.txt"
QR_IMAGE_FILE = "qrcode.png"
QR_BOX_SIZE = 10
QR_BORDER = 4

FEE_KIND_CHOICES = [kind.value for kind in FeeKind] + sorted(FEE_KIND_ALIASES)


def load_qris(qris_input):
    """Accepts either a raw QRIS string or a path to a file containing one."""
    if os.path.isfile(qris_input):
        with open(qris_input, "r") as f:
            return f.read().strip()
    return qris_input.strip()


def make_qr_image(qr_content):
    # QRIS payloads never fit a version 1 symbol, so let qrcode size it.
    qr = qrcode.QRCode(version=None, box_size=QR_BOX_SIZE, border=QR_BORDER)
    qr.add_data(qr_content)
    qr.make(fit=True)
    return qr.make_image(fill_color="black", back_color="white")


def render_qr_png(qr_content):
    """Returns the QR code for qr_content as PNG bytes."""
    buffer = io.BytesIO()
    make_qr_image(qr_content).save(buffer)
    return buffer.getvalue()


def print_validation(qris):
    result = validate_qris(qris)
    if result.valid:
        print("[OK] QRIS is valid.")
    else:
        for error in result.errors:
            print(f"[!] {error}")
    return result.valid


def build_parser():
    parser = argparse.ArgumentParser(description="QRIS Static to Dynamic Generator")
    parser.add_argument("qris", help="Static QRIS string or path to a file containing it")
    parser.add_argument("amount", nargs="?", help="Transaction amount in IDR")
    parser.add_argument("--fee-kind", default=FeeKind.PERCENTAGE.value, choices=FEE_KIND_CHOICES,
                        help="Fee type: percentage (p) or fixed rupiah amount (r)")
    parser.add_argument("--fee", default="0", help="Fee value, percentage or IDR depending on --fee-kind")
    parser.add_argument("--output", default=QR_TEXT_FILE, help="File to save the dynamic QRIS string")
    parser.add_argument("--image", default=QR_IMAGE_FILE, help="File to save the QR code image")
    parser.add_argument("--no-image", action="store_true", help="Skip generating the QR code image")
    parser.add_argument("--validate-only", action="store_true",
                        help="Only validate the input QRIS and exit")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    qris_static = load_qris(args.qris)

    if args.validate_only:
        return 0 if print_validation(qris_static) else 1

    if args.amount is None:
        parser.error("amount is required unless --validate-only is given")

    print(f"[*] Converting static QRIS (amount: {args.amount}, fee: {args.fee} {args.fee_kind})")
    try:
        qris_dynamic = generate_dynamic_qris(qris_static, args.amount, fee_kind=args.fee_kind, fee=args.fee)
    except QRISError as e:
        print(f"[!] Error: {e}")
        return 1

    print(f"[OK] Dynamic QRIS: {qris_dynamic}")

    with open(args.output, "w") as f:
        f.write(qris_dynamic)
    print(f"[*] Raw QR string saved to '{args.output}'.")

    if not args.no_image:
        print("[*] Generating QR Code Image...")
        make_qr_image(qris_dynamic).save(args.image)
        print(f"[*] QR Code image saved as '{args.image}'.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
