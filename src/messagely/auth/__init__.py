"""Authentication and authorization.

Learn: Three pieces make up the trust core:
1. PasswordHasher → bcrypt hashes stored with each credential
2. TokenService → signed identity tokens (JWT) issued on register/login
3. AuthorizationGuard → decides which identity may see or change a message

The FastAPI wiring for all three lives in auth.dependencies.
"""
