# conversa_api/api/routes/auth_routes.py
from flask import Blueprint, g, jsonify, request

from conversa_api.api.middlewares.auth_middleware import require_auth
from conversa_api.api.resources.user_resource import UserResource
from conversa_api.api.schemas._validation import validate_payload
from conversa_api.api.schemas.auth_schema import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    ResetPasswordRequest,
    ResetPasswordResponse,
    TokenResponse,
    UpdateProfileRequest,
)
from conversa_api.infrastructure.database.session import db_session
from conversa_api.infrastructure.security.jwt_provider import JwtProvider
from conversa_api.infrastructure.security.password_hasher import PasswordHasher
from conversa_api.repositories.user_repository import UserRepository
from conversa_api.services.auth_service import AuthService

bp_auth = Blueprint("auth", __name__, url_prefix="/auth")


def _build_service(session) -> AuthService:
    return AuthService(
        user_repo=UserRepository(session),
        hasher=PasswordHasher(),
        jwt_provider=JwtProvider(),
    )


@bp_auth.post("/register")
def register():
    payload = validate_payload(RegisterRequest, request.get_json(silent=True))

    with db_session() as session:
        user = _build_service(session).register(
            name=payload.name, email=payload.email, password=payload.password
        )
        data = UserResource.to_response(user)

    return jsonify({"message": "Usuário criado com sucesso.", "data": data}), 201


@bp_auth.post("/login")
def login():
    payload = validate_payload(LoginRequest, request.get_json(silent=True))

    with db_session() as session:
        result = _build_service(session).login(email=payload.email, password=payload.password)
        data = LoginResponse(
            token=TokenResponse(access_token=result.access_token, expires_in=result.expires_in),
            user=UserResource.to_model(result.user),
        ).to_json()

    return jsonify({"message": "Login realizado com sucesso.", "data": data}), 200


@bp_auth.get("/me")
@require_auth
def me():
    with db_session() as session:
        user = _build_service(session).me(g.user_id)
        data = UserResource.to_response(user)

    return jsonify({"message": "Usuário encontrado com sucesso.", "data": data}), 200


@bp_auth.put("/me")
@require_auth
def update_me():
    payload = validate_payload(UpdateProfileRequest, request.get_json(silent=True))

    with db_session() as session:
        user = _build_service(session).update_profile(
            user_id=g.user_id,
            name=payload.name,
            current_password=payload.current_password,
            new_password=payload.new_password,
        )
        data = UserResource.to_response(user)

    return jsonify({"message": "Usuário atualizado com sucesso.", "data": data}), 200


@bp_auth.post("/reset-password")
def reset_password():
    payload = validate_payload(ResetPasswordRequest, request.get_json(silent=True))

    with db_session() as session:
        result = _build_service(session).reset_password(email=payload.email)
        # a senha nova volta em texto puro (não há envio por email)
        data = ResetPasswordResponse(
            new_password=result.new_password,
            user=UserResource.to_model(result.user),
        ).to_json()

    return jsonify({"message": "Senha resetada com sucesso.", "data": data}), 200


@bp_auth.put("/change-password")
@require_auth
def change_password():
    payload = validate_payload(ChangePasswordRequest, request.get_json(silent=True))

    with db_session() as session:
        user = _build_service(session).change_password(
            user_id=g.user_id,
            current_password=payload.current_password,
            new_password=payload.new_password,
        )
        data = UserResource.to_response(user)

    return jsonify({"message": "Senha alterada com sucesso.", "data": data}), 200
