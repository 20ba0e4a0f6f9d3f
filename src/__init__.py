"""Study Planner Backend.

Application tracker and study calendar that keeps application deadlines
and checklists in sync with the calendar and derives in-app alerts.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
