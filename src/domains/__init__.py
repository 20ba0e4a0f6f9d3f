# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for the study planner.

Domains:
    planner: Application tracker, study calendar and their synchronization.
"""
