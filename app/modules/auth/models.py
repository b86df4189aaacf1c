# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required for sessions - Supabase Auth handles:
# - User login and session management (auth.users)
# - JWT access/refresh token issuance and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_in_with_password() - Authenticate admins and canvassers
- auth.get_user() - Get current user from JWT token
- auth.refresh_session() - Exchange a refresh token for a new session
- auth.sign_out() - Logout users
- auth.admin.create_user() - Create confirmed logins (service role only)

Roles are not stored on the auth user. They are derived from two tables:
- admins.user_id = auth.users.id            -> admin
- canvassers.email = auth.users.email and canvassers.active -> canvasser
"""
