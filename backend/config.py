# backend/config.py
import os
from decimal import Decimal
from pathlib import Path
from dotenv import load_dotenv

# Load .env from the backend directory or the project root
env_path = Path(__file__).parent / '.env'
if not env_path.exists():
    env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

# Balances within this distance of zero count as settled
SETTLEMENT_EPSILON = Decimal(os.getenv("SPLITIT_SETTLEMENT_EPSILON", "0.01"))
CURRENCY_DEFAULT = os.getenv("SPLITIT_DEFAULT_CURRENCY", "INR")


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    DEBUG = os.getenv('FLASK_DEBUG', '0') == '1'
    PORT = int(os.getenv('PORT', '5000'))

    # Comma separated; "*" lets any front end call the API
    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', '*').split(',') if o.strip()]

    CURRENCY = CURRENCY_DEFAULT


class TestConfig(Config):
    TESTING = True
    CORS_ORIGINS = ['*']
