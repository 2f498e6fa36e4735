"""Class presence package.

Organized by feature modules (classes, institutions, attendance) with a thin
Flask controller layer over service/repository layers. The attendance module
holds the confirmation window and geofence rules used for student
self-confirmation.
"""
