"""Database initialization and schema management."""

from psycopg import Error as DatabaseError
from psycopg_pool import AsyncConnectionPool
from rich.console import Console

console = Console()


SCHEMA_SQL = """
CREATE EXTENSION IF NOT EXISTS postgis;

-- Sources table
CREATE TABLE IF NOT EXISTS sources (
    id SERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL UNIQUE,
    base_url VARCHAR(500) NOT NULL,
    language VARCHAR(10) NOT NULL DEFAULT 'en',
    scraper_config JSONB NOT NULL DEFAULT '{}'::jsonb,
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    last_scraped_at TIMESTAMPTZ,
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- Articles table
CREATE TABLE IF NOT EXISTS articles (
    id SERIAL PRIMARY KEY,
    source_id INTEGER NOT NULL REFERENCES sources(id),
    url VARCHAR(1000) NOT NULL UNIQUE,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    author VARCHAR(255),
    published_at TIMESTAMPTZ,
    scraped_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    language VARCHAR(10),
    image_urls TEXT[],
    metadata JSONB,
    content_hash VARCHAR(64),
    is_processed BOOLEAN NOT NULL DEFAULT FALSE,
    processed_at TIMESTAMPTZ,
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- Classifications table
CREATE TABLE IF NOT EXISTS classifications (
    id SERIAL PRIMARY KEY,
    article_id INTEGER NOT NULL REFERENCES articles(id) ON DELETE CASCADE,
    is_political_violence BOOLEAN NOT NULL,
    confidence DECIMAL(3,2) NOT NULL CHECK (confidence >= 0 AND confidence <= 1),
    reasoning TEXT,
    key_indicators TEXT[],
    violence_type VARCHAR(100),
    location_mentioned VARCHAR(255),
    political_actors TEXT[],
    provider VARCHAR(50),
    model_version VARCHAR(50) NOT NULL,
    processing_time_ms INTEGER,
    processed_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    UNIQUE(article_id, model_version)
);

-- Location mentions extracted from articles
CREATE TABLE IF NOT EXISTS article_locations (
    id SERIAL PRIMARY KEY,
    article_id INTEGER NOT NULL REFERENCES articles(id) ON DELETE CASCADE,
    extracted_text TEXT NOT NULL,
    normalized_name VARCHAR(255),
    location_type VARCHAR(50),
    coordinates GEOMETRY(POINT, 4326),
    confidence VARCHAR(10) NOT NULL CHECK (confidence IN ('high', 'medium', 'low')),
    extraction_method VARCHAR(20) NOT NULL DEFAULT 'ai',
    context TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- Administrative gazetteer
CREATE TABLE IF NOT EXISTS locations (
    id SERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL,
    name_bn VARCHAR(255),
    type VARCHAR(50) NOT NULL,
    parent_id INTEGER REFERENCES locations(id),
    admin_code VARCHAR(20),
    coordinates GEOMETRY(POINT, 4326) NOT NULL,
    boundary GEOMETRY(POLYGON, 4326),
    population INTEGER,
    area_sq_km DECIMAL(10,2),
    metadata JSONB,
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- Incidents extracted from classified articles
CREATE TABLE IF NOT EXISTS incidents (
    id SERIAL PRIMARY KEY,
    article_id INTEGER REFERENCES articles(id),
    classification_id INTEGER REFERENCES classifications(id),
    title VARCHAR(500) NOT NULL,
    summary TEXT NOT NULL,
    incident_date DATE,
    incident_type VARCHAR(50) NOT NULL,
    location_raw TEXT NOT NULL,
    location_id INTEGER REFERENCES locations(id),
    coordinates GEOMETRY(POINT, 4326),
    location_confidence DECIMAL(3,2),
    killed INTEGER DEFAULT 0 CHECK (killed >= 0),
    injured INTEGER DEFAULT 0 CHECK (injured >= 0),
    missing INTEGER DEFAULT 0 CHECK (missing >= 0),
    perpetrators TEXT[],
    victims TEXT[],
    political_parties TEXT[],
    weapons_used TEXT[],
    property_damage TEXT,
    context TEXT,
    primary_image_url VARCHAR(1000),
    image_urls TEXT[],
    extraction_confidence DECIMAL(3,2),
    verified BOOLEAN DEFAULT FALSE,
    verification_notes TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS processing_logs (
    id SERIAL PRIMARY KEY,
    article_id INTEGER REFERENCES articles(id),
    process_type VARCHAR(50) NOT NULL,
    status VARCHAR(20) NOT NULL,
    started_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    completed_at TIMESTAMPTZ,
    error_message TEXT,
    retry_count INTEGER DEFAULT 0,
    metadata JSONB
);

CREATE TABLE IF NOT EXISTS scraping_sessions (
    id SERIAL PRIMARY KEY,
    source_id INTEGER REFERENCES sources(id),
    started_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    completed_at TIMESTAMPTZ,
    status VARCHAR(20) NOT NULL,
    articles_found INTEGER DEFAULT 0,
    articles_new INTEGER DEFAULT 0,
    articles_updated INTEGER DEFAULT 0,
    errors_count INTEGER DEFAULT 0,
    error_details JSONB,
    metadata JSONB
);

-- Create indexes
CREATE INDEX IF NOT EXISTS idx_sources_active ON sources(is_active);
CREATE INDEX IF NOT EXISTS idx_articles_source_id ON articles(source_id);
CREATE INDEX IF NOT EXISTS idx_articles_published_at ON articles(published_at);
CREATE INDEX IF NOT EXISTS idx_articles_scraped_at ON articles(scraped_at);
CREATE INDEX IF NOT EXISTS idx_articles_is_processed ON articles(is_processed);
CREATE INDEX IF NOT EXISTS idx_articles_content_hash ON articles(content_hash);
CREATE INDEX IF NOT EXISTS idx_classifications_article_id ON classifications(article_id);
CREATE INDEX IF NOT EXISTS idx_classifications_is_political_violence ON classifications(is_political_violence);
CREATE INDEX IF NOT EXISTS idx_article_locations_article_id ON article_locations(article_id);
CREATE INDEX IF NOT EXISTS idx_article_locations_coordinates ON article_locations USING GIST(coordinates);
CREATE INDEX IF NOT EXISTS idx_locations_coordinates ON locations USING GIST(coordinates);
CREATE INDEX IF NOT EXISTS idx_locations_parent_id ON locations(parent_id);
CREATE INDEX IF NOT EXISTS idx_incidents_article_id ON incidents(article_id);
CREATE INDEX IF NOT EXISTS idx_incidents_coordinates ON incidents USING GIST(coordinates);
CREATE INDEX IF NOT EXISTS idx_incidents_political_parties ON incidents USING GIN(political_parties);
CREATE INDEX IF NOT EXISTS idx_processing_logs_article_id ON processing_logs(article_id);
CREATE INDEX IF NOT EXISTS idx_scraping_sessions_source_id ON scraping_sessions(source_id);

-- Update trigger function
CREATE OR REPLACE FUNCTION update_updated_at_column()
RETURNS TRIGGER AS $$
BEGIN
    NEW.updated_at = CURRENT_TIMESTAMP;
    RETURN NEW;
END;
$$ language 'plpgsql';

DROP TRIGGER IF EXISTS update_sources_updated_at ON sources;
CREATE TRIGGER update_sources_updated_at BEFORE UPDATE ON sources
    FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();

DROP TRIGGER IF EXISTS update_incidents_updated_at ON incidents;
CREATE TRIGGER update_incidents_updated_at BEFORE UPDATE ON incidents
    FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
"""


async def validate_connection(pool: AsyncConnectionPool) -> bool:
    """Validate database connection."""
    try:
        async with pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT 1 AS ok")
                result = await cur.fetchone()
                return result is not None and result["ok"] == 1
    except DatabaseError as e:
        console.print(f"[red]Database connection failed: {e}[/red]")
        return False


async def init_database(pool: AsyncConnectionPool) -> None:
    """Initialize database schema."""
    try:
        async with pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(SCHEMA_SQL)
            await conn.commit()
    except DatabaseError as e:
        console.print(f"[red]Failed to initialize database schema: {e}[/red]")
        raise
