"""
auth — User authentication module.

Provides:
  • Signed, time-limited bearer token creation & verification
  • Password hashing (bcrypt, work factor 10)
  • Register / Login API routes
  • ``get_current_user_id`` FastAPI dependency
"""
