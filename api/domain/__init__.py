# SPDX-License-Identifier: Apache-2.0

"""
Domain logic package for the RESPOND platform.

This package holds the matching, assignment and request presentation
rules. Domain code talks to persistence only through the EntityStore
interface, so it is testable against the in-memory store.
"""
