"""Authentication and authorization.

Users sign up or sign in with email/password and receive a signed bearer
token (JWT, 7-day validity). Protected routes resolve that token back to
an active user through the dependencies in auth.dependencies.
"""
