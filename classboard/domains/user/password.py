# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""bcrypt hashing for stored account passwords.

``User.password`` only ever holds the output of ``PasswordHasher.hash``.
Hashes carry their own salt and cost, so a hasher configured with a
different cost still verifies older hashes.
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """Hashes and checks account passwords.

    Attributes:
        rounds: bcrypt cost factor for new hashes.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Return a salted bcrypt hash of ``password``.

        Raises:
            ValueError: If the password is empty.
        """
        if not password:
            raise ValueError("Password cannot be empty")

        digest = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds))
        return digest.decode("utf-8")

    def verify(self, password: str, stored_hash: str) -> bool:
        """Check ``password`` against a hash produced by ``hash``.

        Empty input and malformed hashes never match.
        """
        if not password or not stored_hash:
            return False

        try:
            return bcrypt.checkpw(password.encode("utf-8"), stored_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False
