"""
User accounts: registration and stateless login.
"""
