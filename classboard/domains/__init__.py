# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services for ClassBoard.

Every service takes an EntityStore and holds no storage-specific types.
"""
