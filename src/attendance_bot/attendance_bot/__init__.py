"""Attendance Bot package.

Organized by feature modules (attendance, bot) on top of shared core/common
helpers, with a thin Telegram layer over the service/repository layers.
"""
