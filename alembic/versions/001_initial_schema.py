"""Initial schema: users, tasks, articles, reference materials with RLS.

Revision ID: 001
Revises:
Create Date: 2025-03-01
"""

from alembic import op

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Safe accessor for the RLS user; NULL when app.user_id is unset or empty
    op.execute("""
        CREATE OR REPLACE FUNCTION get_app_user_id() RETURNS uuid AS $$
        DECLARE
            val text;
        BEGIN
            val := current_setting('app.user_id', true);
            IF val IS NULL OR val = '' THEN
                RETURN NULL;
            END IF;
            RETURN val::uuid;
        END;
        $$ LANGUAGE plpgsql STABLE;
    """)

    # Create users table
    op.execute("""
        CREATE TABLE users (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            email TEXT UNIQUE NOT NULL,
            name TEXT,
            created_at TIMESTAMPTZ DEFAULT now()
        );
    """)

    # Create reference_materials table (style sources a task imitates)
    op.execute("""
        CREATE TABLE reference_materials (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID REFERENCES users(id) ON DELETE CASCADE,
            style_name TEXT,
            source_title TEXT,
            source_url TEXT,
            created_at TIMESTAMPTZ DEFAULT now()
        );
    """)

    # Create tasks table; current_chapter/total_chapters are written by the workflow
    op.execute("""
        CREATE TABLE tasks (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID REFERENCES users(id) ON DELETE SET NULL,
            topic TEXT NOT NULL,
            keywords TEXT,
            total_word_count INTEGER NOT NULL DEFAULT 4000,
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'processing', 'completed', 'failed', 'cancelled')),
            cover_prompt_id UUID,
            ref_material_id UUID REFERENCES reference_materials(id) ON DELETE SET NULL,
            current_chapter INTEGER,
            total_chapters INTEGER,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            deleted_at TIMESTAMPTZ
        );
    """)

    op.execute("CREATE INDEX idx_tasks_user_created ON tasks(user_id, created_at DESC) WHERE deleted_at IS NULL;")
    op.execute("CREATE INDEX idx_tasks_user_status ON tasks(user_id, status);")

    # Create articles table (workflow output, one live row per task)
    op.execute("""
        CREATE TABLE articles (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            task_id UUID NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
            title TEXT,
            subtitle TEXT,
            content TEXT,
            word_count INTEGER,
            cover_url TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            deleted_at TIMESTAMPTZ
        );
    """)

    op.execute("CREATE UNIQUE INDEX idx_articles_live_task ON articles(task_id) WHERE deleted_at IS NULL;")

    # RLS: every table is scoped to get_app_user_id(), forced for owners too
    for table in ("users", "reference_materials", "tasks", "articles"):
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")
        op.execute(f"ALTER TABLE {table} FORCE ROW LEVEL SECURITY;")

    op.execute("""
        CREATE POLICY users_own ON users
        FOR ALL
        USING (id = get_app_user_id());
    """)

    op.execute("""
        CREATE POLICY reference_materials_own ON reference_materials
        FOR ALL
        USING (user_id = get_app_user_id())
        WITH CHECK (user_id = get_app_user_id());
    """)

    op.execute("""
        CREATE POLICY tasks_own ON tasks
        FOR ALL
        USING (user_id = get_app_user_id())
        WITH CHECK (user_id = get_app_user_id());
    """)

    op.execute("""
        CREATE POLICY articles_own ON articles
        FOR ALL
        USING (task_id IN (SELECT id FROM tasks WHERE user_id = get_app_user_id()))
        WITH CHECK (task_id IN (SELECT id FROM tasks WHERE user_id = get_app_user_id()));
    """)


def downgrade():
    op.execute("DROP TABLE IF EXISTS articles CASCADE;")
    op.execute("DROP TABLE IF EXISTS tasks CASCADE;")
    op.execute("DROP TABLE IF EXISTS reference_materials CASCADE;")
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS get_app_user_id();")
