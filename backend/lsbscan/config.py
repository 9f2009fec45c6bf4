# Configuration settings
import os
from dotenv import load_dotenv

# Pick up variables from a local .env file, if present
load_dotenv()

# This class holds all the configuration variables for the app
class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-change-me')
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 16 * 1024 * 1024))
    ALLOWED_EXTENSIONS = {ext.strip().lower() for ext in os.environ.get('ALLOWED_EXTENSIONS', 'png,jpg,jpeg,bmp').split(',')}
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG').upper()
    # Built frontend served from '/', if it exists
    FRONTEND_BUILD_DIR = os.environ.get(
        'FRONTEND_BUILD_DIR',
        os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..', 'frontend', 'build')),
    )
