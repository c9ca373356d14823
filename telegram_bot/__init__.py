"""
Telegram bot transport
"""
