"""Authentication and authorization.

Three pieces:
1. PasswordHasher → bcrypt hashing for stored credentials
2. TokenService → signed JWTs carrying {"userId"} with a 2h expiry
3. get_current_user → FastAPI dependency that resolves the bearer
   token to a loaded User, or halts the request

The resolved User is the only input playlist routes use for
ownership scoping.
"""
