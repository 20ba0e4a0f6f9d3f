# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core package for the study planner.

This package contains the shared configuration and the alert logic:
- config: Application configuration and settings
- notifications: Alerts derived from study tasks and applications
"""
