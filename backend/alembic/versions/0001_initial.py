"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17 00:00:00.000000

Users, scam reports with their consolidated scams and link rows, comments,
statistics snapshots, lawyer profiles and requests, and scam videos.
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

scam_type = sa.Enum("phone", "email", "business", name="scam_type")
# Later tables reuse the type created with scam_reports
scam_type_ref = postgresql.ENUM(
    "phone", "email", "business", name="scam_type", create_type=False
)
user_role = sa.Enum("admin", "user", "lawyer", name="user_role")
auth_provider = sa.Enum("local", "google", name="auth_provider")
stats_scope = sa.Enum("published", "all", name="stats_scope")
lawyer_specialization = sa.Enum(
    "consumer_fraud",
    "identity_theft",
    "financial_recovery",
    "general_practice",
    "cyber_crime",
    name="lawyer_specialization",
)
verification_status = sa.Enum(
    "pending", "verified", "rejected", name="verification_status"
)
request_status = sa.Enum(
    "pending", "accepted", "rejected", "completed", name="request_status"
)
urgency_level = sa.Enum("low", "medium", "high", name="urgency_level")
contact_method = sa.Enum("email", "phone", "either", name="contact_method")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=True),
        sa.Column("display_name", sa.String(), nullable=False),
        sa.Column("username", sa.String(length=20), nullable=True),
        sa.Column("role", user_role, nullable=False),
        sa.Column("auth_provider", auth_provider, nullable=False),
        sa.Column("google_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "scam_reports",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("scam_type", scam_type, nullable=False),
        sa.Column("scam_phone_number", sa.String(), nullable=True),
        sa.Column("scam_email", sa.String(), nullable=True),
        sa.Column("scam_business_name", sa.String(), nullable=True),
        sa.Column("incident_date", sa.Date(), nullable=False),
        sa.Column("country", sa.String(), nullable=False),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("state", sa.String(), nullable=True),
        sa.Column("zip_code", sa.String(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("has_proof_document", sa.Boolean(), nullable=True),
        sa.Column("proof_file_path", sa.String(), nullable=True),
        sa.Column("proof_file_name", sa.String(), nullable=True),
        sa.Column("proof_file_type", sa.String(), nullable=True),
        sa.Column("proof_file_size", sa.Integer(), nullable=True),
        sa.Column("reported_at", sa.DateTime(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("verified_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("verified_at", sa.DateTime(), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=True),
        sa.Column(
            "published_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True
        ),
        sa.Column("published_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_scam_reports_id", "scam_reports", ["id"])
    op.create_index("ix_scam_reports_user_id", "scam_reports", ["user_id"])
    op.create_index("ix_scam_reports_scam_type", "scam_reports", ["scam_type"])
    op.create_index("ix_scam_reports_reported_at", "scam_reports", ["reported_at"])
    op.create_index(
        "ix_scam_reports_published_reported",
        "scam_reports",
        ["is_published", "reported_at"],
    )

    op.create_table(
        "consolidated_scams",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("scam_type", scam_type_ref, nullable=False),
        sa.Column("identifier", sa.String(), nullable=False, unique=True),
        sa.Column("report_count", sa.Integer(), nullable=False),
        sa.Column("first_reported_at", sa.DateTime(), nullable=False),
        sa.Column("last_reported_at", sa.DateTime(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_consolidated_scams_id", "consolidated_scams", ["id"])
    op.create_index(
        "ix_consolidated_scams_scam_type", "consolidated_scams", ["scam_type"]
    )

    op.create_table(
        "scam_report_consolidations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "scam_report_id",
            sa.Integer(),
            sa.ForeignKey("scam_reports.id"),
            nullable=False,
            unique=True,
        ),
        sa.Column(
            "consolidated_scam_id",
            sa.Integer(),
            sa.ForeignKey("consolidated_scams.id"),
            nullable=False,
        ),
    )
    op.create_index(
        "ix_scam_report_consolidations_id", "scam_report_consolidations", ["id"]
    )
    op.create_index(
        "ix_scam_report_consolidations_consolidated_scam_id",
        "scam_report_consolidations",
        ["consolidated_scam_id"],
    )

    op.create_table(
        "scam_comments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "scam_report_id",
            sa.Integer(),
            sa.ForeignKey("scam_reports.id"),
            nullable=False,
        ),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_scam_comments_id", "scam_comments", ["id"])
    op.create_index(
        "ix_scam_comments_scam_report_id", "scam_comments", ["scam_report_id"]
    )

    op.create_table(
        "scam_stats",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("scope", stats_scope, nullable=False),
        sa.Column("total_reports", sa.Integer(), nullable=False),
        sa.Column("phone_scams", sa.Integer(), nullable=False),
        sa.Column("email_scams", sa.Integer(), nullable=False),
        sa.Column("business_scams", sa.Integer(), nullable=False),
        sa.Column("reports_with_proof", sa.Integer(), nullable=False),
        sa.Column("verified_reports", sa.Integer(), nullable=False),
    )
    op.create_index("ix_scam_stats_id", "scam_stats", ["id"])
    op.create_index("ix_scam_stats_scope_id", "scam_stats", ["scope", "id"])

    op.create_table(
        "lawyer_profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id"),
            nullable=False,
            unique=True,
        ),
        sa.Column("bar_number", sa.String(), nullable=False),
        sa.Column("years_of_experience", sa.Integer(), nullable=False),
        sa.Column("firm_name", sa.String(), nullable=True),
        sa.Column("primary_specialization", lawyer_specialization, nullable=False),
        sa.Column("secondary_specializations", sa.JSON(), nullable=True),
        sa.Column("office_location", sa.String(), nullable=False),
        sa.Column("office_phone", sa.String(), nullable=False),
        sa.Column("office_email", sa.String(), nullable=False),
        sa.Column("bio", sa.Text(), nullable=False),
        sa.Column("profile_photo_url", sa.String(), nullable=True),
        sa.Column("website_url", sa.String(), nullable=True),
        sa.Column("verification_status", verification_status, nullable=False),
        sa.Column("verification_document_path", sa.String(), nullable=True),
        sa.Column("verified_at", sa.DateTime(), nullable=True),
        sa.Column("verified_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("accepting_new_clients", sa.Boolean(), nullable=True),
        sa.Column("case_types", sa.JSON(), nullable=True),
        sa.Column("offers_free_consultation", sa.Boolean(), nullable=True),
        sa.Column("consultation_fee", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_lawyer_profiles_id", "lawyer_profiles", ["id"])

    op.create_table(
        "lawyer_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("scam_type", scam_type_ref, nullable=False),
        sa.Column(
            "scam_report_id",
            sa.Integer(),
            sa.ForeignKey("scam_reports.id"),
            nullable=True,
        ),
        sa.Column("loss_amount", sa.String(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("urgency", urgency_level, nullable=False),
        sa.Column("preferred_contact", contact_method, nullable=False),
        sa.Column("status", request_status, nullable=False),
        sa.Column(
            "lawyer_profile_id",
            sa.Integer(),
            sa.ForeignKey("lawyer_profiles.id"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_lawyer_requests_id", "lawyer_requests", ["id"])
    op.create_index("ix_lawyer_requests_status", "lawyer_requests", ["status"])
    op.create_index(
        "ix_lawyer_requests_lawyer_profile_id", "lawyer_requests", ["lawyer_profile_id"]
    )

    op.create_table(
        "scam_videos",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("youtube_url", sa.String(), nullable=False),
        sa.Column("youtube_video_id", sa.String(), nullable=False),
        sa.Column("scam_type", scam_type_ref, nullable=True),
        sa.Column("featured", sa.Boolean(), nullable=True),
        sa.Column(
            "added_by_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column("added_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column(
            "consolidated_scam_id",
            sa.Integer(),
            sa.ForeignKey("consolidated_scams.id"),
            nullable=True,
        ),
    )
    op.create_index("ix_scam_videos_id", "scam_videos", ["id"])
    op.create_index(
        "ix_scam_videos_consolidated_scam_id", "scam_videos", ["consolidated_scam_id"]
    )


def downgrade() -> None:
    """Drop every table. Data is lost."""
    for table in (
        "scam_videos",
        "lawyer_requests",
        "lawyer_profiles",
        "scam_stats",
        "scam_comments",
        "scam_report_consolidations",
        "consolidated_scams",
        "scam_reports",
        "users",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in (
        contact_method,
        urgency_level,
        request_status,
        verification_status,
        lawyer_specialization,
        stats_scope,
        auth_provider,
        user_role,
        scam_type,
    ):
        enum_type.drop(bind, checkfirst=True)
