from .db import get_db_connection
import logging

logger = logging.getLogger(__name__)

REPORTS_TABLE = "water_reports"
CHANGES_CHANNEL = "water_reports_changes"

SCHEMA_SQL = f"""
    -- Water reports: one row per reported supply issue
    CREATE TABLE IF NOT EXISTS {REPORTS_TABLE} (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        title TEXT NOT NULL,
        description TEXT NOT NULL,
        location TEXT NOT NULL,
        latitude DOUBLE PRECISION,
        longitude DOUBLE PRECISION,
        status VARCHAR(20) NOT NULL CHECK (status IN ('active', 'investigating', 'resolved')) DEFAULT 'active',
        severity VARCHAR(20) NOT NULL CHECK (severity IN ('low', 'medium', 'high', 'critical')),
        reported_by TEXT NOT NULL,
        contact_info TEXT,
        created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW()
    );

    CREATE INDEX IF NOT EXISTS idx_{REPORTS_TABLE}_created_at ON {REPORTS_TABLE} (created_at DESC);

    -- Change notifications carry only the operation name; listeners re-fetch
    CREATE OR REPLACE FUNCTION notify_{CHANGES_CHANNEL}() RETURNS trigger AS $$
    BEGIN
        PERFORM pg_notify('{CHANGES_CHANNEL}', TG_OP);
        RETURN NULL;
    END;
    $$ LANGUAGE plpgsql;

    DROP TRIGGER IF EXISTS {CHANGES_CHANNEL} ON {REPORTS_TABLE};
    CREATE TRIGGER {CHANGES_CHANNEL}
        AFTER INSERT OR UPDATE OR DELETE ON {REPORTS_TABLE}
        FOR EACH STATEMENT EXECUTE FUNCTION notify_{CHANGES_CHANNEL}();
"""


async def create_tables(pool):
    """Create the water reports table and its change-notification trigger"""
    logger.info("Executing schema SQL to create/update tables...")
    async with get_db_connection(pool) as conn:
        await conn.execute(SCHEMA_SQL)
    logger.info("Database tables created/updated successfully.")
