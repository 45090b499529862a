"""
SecureAuth - Attack Demonstration

Run: python attack_demo.py

What it shows (and why attacks fail):
1) Guessing the wrong password does not log in.
2) Copying another user's salt onto your record breaks verification.
3) Editing the stored hash in the text file breaks verification.
4) Two users with the same password get different hashes (no rainbow tables).
5) Garbage lines injected into the credential file are ignored on load.
"""

import os
import tempfile

from secureauth.crypto import CredentialHasher
from secureauth.store import CredentialStore
from secureauth.workflows import ScriptedInput, login, register


LINE = "=" * 70
PASSWORD = "Str0ng!Passw0rd"


def section(title: str):
    print(f"\n{LINE}\n{title}\n{LINE}")


def attempt(store, hasher, username, password):
    result = login(store, hasher, ScriptedInput([username, password]))
    outcome = "SUCCEEDED" if result.ok else "failed"
    print(f"Login as {username!r} {outcome}: {result.message}")
    return result.ok


def rewrite_line(path, username, field, value):
    """Overwrite one field (1=hash, 2=salt) of a user's line on disk."""
    with open(path, encoding="utf-8") as f:
        lines = f.read().splitlines()
    for i, line in enumerate(lines):
        parts = line.split(",")
        if parts[0] == username:
            parts[field] = value
            lines[i] = ",".join(parts)
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")


def main():
    tmp_dir = tempfile.mkdtemp()
    path = os.path.join(tmp_dir, "users.txt")

    hasher = CredentialHasher("fast-dev")
    if not hasher.initialize():
        print("Argon2id is not available in this 'cryptography' build.")
        return

    store = CredentialStore(path)
    store.load()
    for name in ("alice", "mallory"):
        register(store, hasher, ScriptedInput([name, PASSWORD, PASSWORD]), echo=lambda _: None)
    print(f"Registered alice and mallory (same password) in {path}")

    # 1) Wrong password
    section("Attack 1: Guessing passwords")
    for guess in ("str0ng!passw0rd", "Str0ng!Passw0rd1", "password123"):
        attempt(store, hasher, "alice", guess)

    # 2) Salt swap
    section("Attack 2: Replacing alice's salt with a fresh one")
    rewrite_line(path, "alice", 2, hasher.generate_salt())
    store.load()
    attempt(store, hasher, "alice", PASSWORD)

    # 3) Hash tampering
    section("Attack 3: Flipping one hex digit of mallory's stored hash")
    stored_hash, _ = store.lookup("mallory")
    flipped = ("0" if stored_hash[0] != "0" else "1") + stored_hash[1:]
    rewrite_line(path, "mallory", 1, flipped)
    store.load()
    attempt(store, hasher, "mallory", PASSWORD)

    # 4) Per-user salts
    section("Attack 4: Precomputed tables vs per-user salts")
    s1, s2 = hasher.generate_salt(), hasher.generate_salt()
    h1, h2 = hasher.hash_password(PASSWORD, s1), hasher.hash_password(PASSWORD, s2)
    print(f"Same password, salt {s1[:8]}... -> {h1[:16]}...")
    print(f"Same password, salt {s2[:8]}... -> {h2[:16]}...")
    print("Different hashes: a table built for one salt is useless for the other.")

    # 5) Malformed line injection
    section("Attack 5: Injecting junk lines into the credential file")
    with open(path, "a", encoding="utf-8") as f:
        f.write("justoneusername\n")
        f.write("eve,\n")
    store.load()
    print(f"Records after reload: {store.count()} (junk lines skipped)")
    print(f"'justoneusername' registered? {store.exists('justoneusername')}")


if __name__ == "__main__":
    main()
