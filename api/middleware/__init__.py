# SPDX-License-Identifier: Apache-2.0

"""
Middleware package for request processing.

This package contains the error handling, request validation and CORS
components wired into the RESPOND API application.
"""
