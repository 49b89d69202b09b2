# conversa_api/api/routes/__init__.py

from flask import Flask

from conversa_api.api.routes.auth_routes import bp_auth
from conversa_api.api.routes.conversation_routes import bp_conv
from conversa_api.api.routes.health_routes import bp_health
from conversa_api.api.routes.message_routes import bp_msg
from conversa_api.api.routes.permission_routes import bp_perm
from conversa_api.api.routes.role_permission_routes import bp_role_perm
from conversa_api.api.routes.role_routes import bp_roles
from conversa_api.api.routes.user_role_routes import bp_user_roles


def register_routes(app: Flask, *, api_prefix: str) -> None:
    # health fora do prefixo versionado
    app.register_blueprint(bp_health, url_prefix="/health")

    app.register_blueprint(bp_auth, url_prefix=f"{api_prefix}/auth")
    app.register_blueprint(bp_conv, url_prefix=f"{api_prefix}/conversations")
    app.register_blueprint(
        bp_msg, url_prefix=f"{api_prefix}/conversations/<int:conversation_id>/messages"
    )

    app.register_blueprint(bp_perm, url_prefix=f"{api_prefix}/permissions")
    app.register_blueprint(bp_roles, url_prefix=f"{api_prefix}/roles")
    app.register_blueprint(bp_role_perm, url_prefix=f"{api_prefix}/roles-permissions")
    app.register_blueprint(bp_user_roles, url_prefix=f"{api_prefix}/users")
