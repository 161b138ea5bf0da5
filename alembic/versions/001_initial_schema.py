"""Initial schema - role, role_permission, app_user, seeded system roles.

Revision ID: 001
Revises:
Create Date: 2025-05-12

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

RESOURCES = ("dashboard", "widget", "models", "prompts", "analytics", "settings", "users")
ACTIONS = ("view", "create", "edit", "delete", "export", "configure")

SYSTEM_ROLES = {
    "Administrator": (
        "Full access to all system features and settings",
        {resource: ACTIONS for resource in RESOURCES},
    ),
    "Manager": (
        "Can manage content and view analytics, but cannot modify system settings",
        {
            "dashboard": ("view",),
            "widget": ("view", "edit", "configure"),
            "models": ("view", "edit"),
            "prompts": ("view", "create", "edit", "export"),
            "analytics": ("view", "export"),
            "settings": ("view",),
            "users": ("view",),
        },
    ),
    "Editor": (
        "Can edit content but cannot access system settings or user management",
        {
            "dashboard": ("view",),
            "widget": ("view", "edit"),
            "models": ("view",),
            "prompts": ("view", "create", "edit"),
            "analytics": ("view",),
        },
    ),
    "Viewer": (
        "Read-only access to content and analytics",
        {
            resource: ("view",)
            for resource in ("dashboard", "widget", "models", "prompts", "analytics")
        },
    ),
}


def _in_list(column: str, values: Sequence[str]) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


def upgrade() -> None:
    op.create_table(
        "role",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_system", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_role_name", "role", [sa.text("lower(name)")], unique=True)

    op.create_table(
        "role_permission",
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("resource", sa.String(50), primary_key=True),
        sa.Column("action", sa.String(50), primary_key=True),
        sa.CheckConstraint(_in_list("resource", RESOURCES), name="ck_role_permission_resource"),
        sa.CheckConstraint(_in_list("action", ACTIONS), name="ck_role_permission_action"),
    )

    op.create_table(
        "app_user",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        # RESTRICT: a role cannot be deleted while users reference it.
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="RESTRICT"), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_active_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("status IN ('active', 'inactive', 'pending')", name="ck_app_user_status"),
    )
    op.create_index("ix_app_user_subject", "app_user", ["subject"], unique=True)
    op.create_index("ix_app_user_email", "app_user", ["email"], unique=True)
    op.create_index("ix_app_user_role_id", "app_user", ["role_id"])

    conn = op.get_bind()
    for name, (description, grants) in SYSTEM_ROLES.items():
        role_id = conn.execute(
            sa.text(
                "INSERT INTO role (id, name, description, is_system) "
                "VALUES (gen_random_uuid(), :name, :description, true) RETURNING id"
            ),
            {"name": name, "description": description},
        ).scalar_one()
        for resource, actions in grants.items():
            for action in actions:
                conn.execute(
                    sa.text(
                        "INSERT INTO role_permission (role_id, resource, action) "
                        "VALUES (:role_id, :resource, :action)"
                    ),
                    {"role_id": role_id, "resource": resource, "action": action},
                )


def downgrade() -> None:
    op.drop_table("app_user")
    op.drop_table("role_permission")
    op.drop_table("role")
