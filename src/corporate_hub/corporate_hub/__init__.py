"""CorporateHub HR portal package.

Organized by feature modules (profiles, attendance, leaves, payroll, ...) with a
thin Flask controller layer on top of service and repository layers.
"""
