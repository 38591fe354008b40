"""initial catalog schema

Revision ID: 0001_initial_catalog
Revises:
Create Date: 2026-10-18 10:00:00.000000

Hey future me - this is the WHOLE local catalog mirror:

- artists / albums / tracks, keyed locally by integer ids
- genres, shared and unique by name_key (stripped + casefolded name)
- artist_genres / album_genres link tables

NATURAL KEYS (what makes the sync idempotent):
- artists.lidarr_id, albums.lidarr_album_id, tracks.lidarr_track_id are UNIQUE
  (nullable, NULLs don't collide)

The app can also create this schema itself (DATABASE__CREATE_TABLES=true). If you
switch to migrations on a database the app already created, run
`alembic stamp 0001_initial_catalog` instead of upgrading.
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial_catalog"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "genres",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("name_key", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(512), nullable=True),
    )
    op.create_index("ix_genres_name_key", "genres", ["name_key"], unique=True)

    op.create_table(
        "artists",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("biography", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(512), nullable=True),
        sa.Column("lidarr_id", sa.Integer(), nullable=True),
        sa.Column("foreign_artist_id", sa.String(64), nullable=True),
        # JSON list of raw genre names as Lidarr reports them
        sa.Column("genre_names", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_artists_name", "artists", ["name"])
    op.create_index("ix_artists_lidarr_id", "artists", ["lidarr_id"], unique=True)
    op.create_index(
        "ix_artists_foreign_artist_id", "artists", ["foreign_artist_id"]
    )

    op.create_table(
        "albums",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "artist_id",
            sa.Integer(),
            sa.ForeignKey("artists.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("album_type", sa.String(50), nullable=True),
        sa.Column("release_date", sa.Date(), nullable=True),
        sa.Column("cover_image_url", sa.String(512), nullable=True),
        sa.Column("lidarr_album_id", sa.Integer(), nullable=True),
        sa.Column("foreign_album_id", sa.String(64), nullable=True),
        sa.Column("legacy_album_id", sa.Integer(), nullable=True),
        sa.Column(
            "downloaded", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("monitored_release_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_albums_artist_id", "albums", ["artist_id"])
    op.create_index(
        "ix_albums_lidarr_album_id", "albums", ["lidarr_album_id"], unique=True
    )

    op.create_table(
        "tracks",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "album_id",
            sa.Integer(),
            sa.ForeignKey("albums.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("duration_seconds", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("track_number", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("disc_number", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("explicit", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("lidarr_track_id", sa.Integer(), nullable=True),
        sa.Column("audio_path", sa.String(1024), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_tracks_album_id", "tracks", ["album_id"])
    op.create_index(
        "ix_tracks_lidarr_track_id", "tracks", ["lidarr_track_id"], unique=True
    )

    op.create_table(
        "artist_genres",
        sa.Column(
            "artist_id",
            sa.Integer(),
            sa.ForeignKey("artists.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "genre_id",
            sa.Integer(),
            sa.ForeignKey("genres.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "album_genres",
        sa.Column(
            "album_id",
            sa.Integer(),
            sa.ForeignKey("albums.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "genre_id",
            sa.Integer(),
            sa.ForeignKey("genres.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


def downgrade() -> None:
    op.drop_table("album_genres")
    op.drop_table("artist_genres")
    op.drop_index("ix_tracks_lidarr_track_id", table_name="tracks")
    op.drop_index("ix_tracks_album_id", table_name="tracks")
    op.drop_table("tracks")
    op.drop_index("ix_albums_lidarr_album_id", table_name="albums")
    op.drop_index("ix_albums_artist_id", table_name="albums")
    op.drop_table("albums")
    op.drop_index("ix_artists_foreign_artist_id", table_name="artists")
    op.drop_index("ix_artists_lidarr_id", table_name="artists")
    op.drop_index("ix_artists_name", table_name="artists")
    op.drop_table("artists")
    op.drop_index("ix_genres_name_key", table_name="genres")
    op.drop_table("genres")
