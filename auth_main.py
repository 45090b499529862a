"""
SecureAuth - Interactive Menu

Main user interface for the credential manager.
Features:
- Register a new account (password policy + strength meter)
- Log in against the stored salted hashes
- Shows how many users are registered

Settings come from the environment (see secureauth/config.py).
"""

import logging
import os
import sys
import time

from secureauth.config import Settings
from secureauth.crypto import CredentialHasher
from secureauth.store import CredentialStore
from secureauth.workflows import ConsoleInput, login, register

LINE = "=" * 60


def clear_screen():
    if os.name == "nt":
        os.system("cls")
    else:
        os.system("clear")


def pause():
    input("\nPress Enter to continue...")


def print_header(title):
    clear_screen()
    print(LINE)
    print(title.center(len(LINE)))
    print(LINE)
    print()


def loading(message, seconds=1.5):
    print(message, end="", flush=True)
    for _ in range(3):
        time.sleep(seconds / 3)
        print(".", end="", flush=True)
    print()


def report(result):
    print(f"\n{'✓' if result.ok else 'ERROR:'} {result.message}")


def cmd_login(store, hasher, inputs):
    print_header("User Login")
    result = login(store, hasher, inputs)
    report(result)
    pause()


def cmd_register(store, hasher, inputs):
    print_header("New Account Registration")
    try:
        result = register(store, hasher, inputs)
    except OSError as e:
        print(f"\nERROR: Could not save credentials ({e}).")
    else:
        report(result)
    pause()


def print_menu(store, settings):
    print_header("Secure Authentication System")
    print("[Main Menu]")
    print(f"Store: {settings.store_path}")
    print(f"Registered users: {store.count()}")
    print("\n 1) Login")
    print(" 2) Register")
    print(" 3) Exit")


def main_menu(store, hasher, inputs, settings):
    while True:
        print_menu(store, settings)
        c = input("\nChoice (1-3): ").strip()
        if not c.isdigit():
            print("Invalid input")
            time.sleep(1)
            continue
        if c == '1':
            cmd_login(store, hasher, inputs)
        elif c == '2':
            cmd_register(store, hasher, inputs)
        elif c == '3':
            print("\nGoodbye!")
            break
        else:
            print("Invalid choice")
            time.sleep(1)


def main(settings=None):
    if settings is None:
        try:
            settings = Settings.from_env()
        except ValueError as e:
            print(f"ERROR: {e}")
            return 1

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    hasher = CredentialHasher(settings.profile)
    if not hasher.initialize():
        print("ERROR: Cryptographic backend failed to initialize.")
        return 1

    store = CredentialStore(settings.store_path)
    try:
        store.load()
    except OSError as e:
        print(f"ERROR: Could not read credential file ({e}).")
        return 1

    loading("Starting secure session")
    main_menu(store, hasher, ConsoleInput(), settings)
    return 0


def run():
    """Console script entry point."""
    try:
        sys.exit(main())
    except (KeyboardInterrupt, EOFError):
        print("\nExiting...")
        sys.exit(0)


if __name__ == "__main__":
    run()
