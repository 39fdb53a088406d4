#!/usr/bin/env python3
"""
blindrsa CLI – one entry point to run the RSA and blind-signature demos.

Usage:
  Interactive menu:
    python blindrsa_cli.py

  Non-interactive:
    python blindrsa_cli.py --run keygen --bits 2048
    python blindrsa_cli.py --run rsa
    python blindrsa_cli.py --run toy
    python blindrsa_cli.py --run blind
    python blindrsa_cli.py --run dashboards
    python blindrsa_cli.py --run all
"""

from __future__ import annotations

import argparse
import logging
import os
import pathlib
import sys
import textwrap
import time
from typing import Any, Callable, Dict

# Ensure relative repo imports work even if executed from another directory.
sys.path.insert(0, str(pathlib.Path(__file__).parent.resolve()))

from blindsig.blinding import blind_signature_roundtrip
from rsa_core.config import RsaConfig
from rsa_core.encoding import int_to_message, message_to_int
from rsa_core.keygen import MIN_KEY_BITS, generate_keypair
from rsa_core.keys import KeyPair, PrivateKey, PublicKey
from rsa_core.transform import decrypt, encrypt, sign, verify
from utils import console_ui

logger = logging.getLogger("blindrsa")

DEFAULT_BITS = 1024
TOY_KEYPAIR = KeyPair(PublicKey(n=3233, e=17), PrivateKey(n=3233, d=2753))

_IN_RUN_ALL = False


def _print_summary(threat: str, property_shown: str, evidence: str, caveat: str) -> None:
    console_ui.kv("Threat model", threat)
    console_ui.kv("Property shown", property_shown)
    console_ui.kv("Evidence", evidence)
    console_ui.kv("Caveat", caveat)


def clear_screen() -> None:
    """Clear the terminal screen in a cross-platform way."""
    os.system("cls" if os.name == "nt" else "clear")


def _invoke_demo(title: str, module: str, func: Callable[[], Any]) -> Any:
    """Run one demo, reporting failures instead of crashing the menu."""

    if not _IN_RUN_ALL:
        console_ui.running_panel(title, module)
    try:
        result = func()
    except Exception as exc:
        if _IN_RUN_ALL:
            raise
        logger.exception("Demo %r failed", title)
        console_ui.error(f"Demo failed: {exc}")
        if isinstance(exc, ImportError):
            console_ui.warning("Hint: run `pip install -e .[test]`")
        return None
    console_ui.success("Demo completed successfully.")
    return result


def _run_keygen_demo(bits: int, config: RsaConfig | None = None) -> Dict[str, Any]:
    console_ui.section(f"RSA Key Generation ({bits} bits)")
    start = time.perf_counter()
    keypair = generate_keypair(bits, config=config)
    seconds = time.perf_counter() - start
    console_ui.kv_int("Modulus n", keypair.n)
    console_ui.kv("Public exponent e", str(keypair.public.e))
    console_ui.kv_int("Private exponent d", keypair.private.d)
    console_ui.elapsed("Generated in", seconds)
    return {"keypair": keypair, "seconds": seconds, "bits_ok": keypair.n.bit_length() == bits}


def _run_rsa_demo(bits: int, config: RsaConfig | None = None) -> Dict[str, Any]:
    console_ui.section("Textbook RSA Round-trip")
    keypair = generate_keypair(bits, config=config)
    msg = b"hi rsa from CLI"
    m = message_to_int(msg, keypair.n)
    c = encrypt(m, keypair.public)
    repeat_c = encrypt(m, keypair.public)
    out = int_to_message(decrypt(c, keypair.private), keypair.n)
    s = sign(m, keypair.private)
    recovered = verify(s, keypair.public)
    console_ui.kv_int("Modulus n", keypair.n)
    console_ui.kv("Plaintext bytes", repr(msg))
    console_ui.kv_int("Ciphertext", c)
    console_ui.kv("Decryption recovered", repr(out))
    console_ui.kv_int("Signature", s)
    console_ui.kv("Signature verifies", str(recovered == m))
    deterministic = repeat_c == c
    console_ui.section("Summary")
    _print_summary(
        "attacker can choose plaintexts/ciphertexts",
        "encrypt/decrypt and sign/verify are inverse exponentiations",
        f"encrypt(m) repeated -> same ciphertext: {deterministic}",
        "Textbook RSA has no padding; it is deterministic and malleable",
    )
    return {"decrypt_ok": out == msg, "verify_ok": recovered == m, "deterministic": deterministic}


def _run_toy_demo() -> Dict[str, Any]:
    console_ui.section("Toy Key (p=61, q=53)")
    public, private = TOY_KEYPAIR.public, TOY_KEYPAIR.private
    c = encrypt(65, public)
    m = decrypt(c, private)
    console_ui.kv("Public key", f"n={public.n}, e={public.e}")
    console_ui.kv("Private exponent d", str(private.d))
    console_ui.kv("encrypt(65)", str(c))
    console_ui.kv("decrypt(encrypt(65))", str(m))
    return {"ciphertext": c, "plaintext": m}


def _run_blind_demo(bits: int, config: RsaConfig | None = None) -> Dict[str, Any]:
    console_ui.section("Blind Signature Protocol")
    result = blind_signature_roundtrip(bits, config=config)
    console_ui.kv_int("Message m", result["message"])
    console_ui.kv_int("Blinded m * r^e mod n", result["blinded_message"])
    console_ui.kv_int("Signer's output", result["blind_signature"])
    console_ui.kv_int("Unblinded signature", result["signature"])
    console_ui.kv("Signature verifies", str(result["verifies"]))
    console_ui.kv("Equals direct signature", str(result["matches_direct"]))
    console_ui.section("Summary")
    _print_summary(
        "signer must not learn what it signs",
        "unblind(sign(blind(m))) == sign(m)",
        f"signer saw m in clear: {not result['hides_message']} | match: {result['matches_direct']}",
        "Without padding or hashing, blind RSA signs any chosen value",
    )
    return result


def export_dashboards(out_dir: str | pathlib.Path = "Visualizations"):
    # matplotlib is only imported when dashboards are requested.
    from reports.make_all_dashboards import make_all_dashboards

    console_ui.section("Export Dashboards (PNG)")
    results = make_all_dashboards(out_dir)
    for result in results:
        if result.status == "saved" and result.output is not None:
            console_ui.success(str(result.output.resolve()))
        else:
            console_ui.warning(f"{result.target} (skipped: {result.reason})")
    return results


def _demos(bits: int, config: RsaConfig | None = None) -> Dict[str, tuple]:
    return {
        "keygen": ("RSA Key Generation", "rsa_core/keygen.py", lambda: _run_keygen_demo(bits, config)),
        "rsa": ("Textbook RSA Round-trip", "rsa_core/transform.py", lambda: _run_rsa_demo(bits, config)),
        "toy": ("Toy RSA Example", "rsa_core/transform.py", _run_toy_demo),
        "blind": ("Blind Signature Protocol", "blindsig/blinding.py", lambda: _run_blind_demo(bits, config)),
        "dashboards": ("Export Dashboards", "reports/make_all_dashboards.py", export_dashboards),
    }


def run_demo(name: str, bits: int = DEFAULT_BITS, config: RsaConfig | None = None):
    title, module, func = _demos(bits, config)[name]
    return _invoke_demo(title, module, func)


def run_all(bits: int = DEFAULT_BITS, config: RsaConfig | None = None) -> None:
    steps = [(name, entry) for name, entry in _demos(bits, config).items() if name != "dashboards"]

    total = len(steps)
    global _IN_RUN_ALL
    previous_state = _IN_RUN_ALL
    _IN_RUN_ALL = True
    try:
        for index, (_, (title, module, func)) in enumerate(steps, start=1):
            console_ui.step_header(index, total, title)
            console_ui.running_panel(title, module)
            start = time.perf_counter()
            try:
                func()
            except Exception as exc:  # pragma: no cover - runtime safeguard
                logger.exception("Demo %r failed", title)
                console_ui.error(f"Demo failed: {exc}")
            finally:
                console_ui.elapsed("DONE in", time.perf_counter() - start)
                console_ui.line()
    finally:
        _IN_RUN_ALL = previous_state

    console_ui.success("All demos completed.")


def menu(bits: int) -> str:
    clear_screen()
    console_ui.banner("Blind RSA")
    console_ui.bullet(f"Choose a demo to run (key size: {bits} bits):")
    print("  1) Generate an RSA key pair")
    print("  2) Textbook RSA round-trip (encrypt/decrypt, sign/verify)")
    print("  3) Toy RSA example (n = 3233)")
    print("  4) Blind signature protocol")
    print("  5) Run ALL (in order)")
    print("  6) Export dashboards (PNG)")
    print("  7) Change key size")
    print("  0) Exit")
    return input("\nEnter choice: ").strip()


def _ask_bits(current: int) -> int:
    raw = input(f"Key size in bits (current {current}): ").strip()
    if not raw:
        return current
    try:
        bits = int(raw)
    except ValueError:
        console_ui.warning("Invalid key size; keeping the current one.")
        return current
    if bits < 256:
        console_ui.warning("Key size too small; using minimum 256 bits.")
        bits = 256
    return bits


def _key_bits(text: str) -> int:
    try:
        bits = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid key size: {text!r}") from None
    if bits < MIN_KEY_BITS:
        raise argparse.ArgumentTypeError(f"key size must be at least {MIN_KEY_BITS} bits")
    return bits


def parse_args(argv=None):
    ap = argparse.ArgumentParser(
        description="blindrsa CLI: RSA key generation and blind signatures.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""
        Examples:
          python blindrsa_cli.py
          python blindrsa_cli.py --run blind --bits 2048
          python blindrsa_cli.py --run all --plain
        """),
    )
    ap.add_argument(
        "--run",
        choices=["keygen", "rsa", "toy", "blind", "dashboards", "all"],
        help="Run a specific demo non-interactively.",
    )
    ap.add_argument(
        "--bits",
        type=_key_bits,
        default=DEFAULT_BITS,
        help=f"RSA modulus size for the demos (default {DEFAULT_BITS}).",
    )
    ap.add_argument(
        "--plain",
        action="store_true",
        help="Disable colors/banners; print plain ASCII.",
    )
    ap.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level for library messages (DEBUG shows key-generation restarts).",
    )
    return ap.parse_args(argv)


def configure_logging(level: int | str) -> None:
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)
    console_ui.init(plain=args.plain)
    bits = args.bits
    config = RsaConfig.from_env()

    if args.run:
        if args.run == "all":
            run_all(bits, config)
        else:
            run_demo(args.run, bits, config)
        return

    # interactive loop
    names = {"1": "keygen", "2": "rsa", "3": "toy", "4": "blind", "6": "dashboards"}
    while True:
        choice = menu(bits)
        if choice in names:
            run_demo(names[choice], bits, config)
            input("\nPress Enter to return to the main menu...")
        elif choice == "5":
            run_all(bits, config)
            input("\nPress Enter to return to the main menu...")
        elif choice == "7":
            bits = _ask_bits(bits)
        elif choice == "0" or choice.lower() in {"q", "quit", "exit"}:
            print("Goodbye!")
            break
        else:
            print("Invalid choice. Please select 0–7.")


if __name__ == "__main__":
    main()
