# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for the transfer engine's external collaborators.

Ephemeris sources feed the domain (ports.ephemeris); report exporters
consume its results (ports.export). Adapters implement these.
"""
