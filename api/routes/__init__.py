"""
HTTP route blueprints for the RESPOND API.
"""
