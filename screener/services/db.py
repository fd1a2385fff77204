import motor.motor_asyncio
from pymongo import ASCENDING
import os
from dotenv import load_dotenv

from screener.utils.logging_config import get_logger

logger = get_logger(__name__)

load_dotenv()

MONGO_DETAILS = os.getenv("MONGO_DETAILS", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "screening_trainer")
# Lookups must fail fast so an unavailable store degrades to default rules
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

logger.info(f"Initializing MongoDB connection to database: {DB_NAME}")

try:
    client = motor.motor_asyncio.AsyncIOMotorClient(
        MONGO_DETAILS, serverSelectionTimeoutMS=MONGO_TIMEOUT_MS
    )
    db = client[DB_NAME]
    logger.info("MongoDB client initialized successfully")
except Exception as e:
    logger.error(f"Failed to initialize MongoDB client: {e}")
    raise

# Collections
training_configs_coll = db["ai_training_configs"]
training_settings_coll = db["ai_training_settings"]


async def init_indexes():
    """Index initialization for the training collections."""
    logger.info("Starting database index initialization")

    try:
        await training_configs_coll.create_index([("domain", ASCENDING)], unique=True)
        logger.debug("Created unique index on ai_training_configs.domain")
    except Exception as e:
        if "already exists" in str(e).lower():
            logger.debug("Index on ai_training_configs.domain already exists")
        else:
            logger.warning(f"Could not create unique index on ai_training_configs.domain: {e}")

    try:
        await training_configs_coll.create_index([("is_active", ASCENDING)])
        logger.debug("Created index on ai_training_configs.is_active")
    except Exception as e:
        logger.warning(f"Could not create index on ai_training_configs.is_active: {e}")

    logger.info("Database index initialization completed")
