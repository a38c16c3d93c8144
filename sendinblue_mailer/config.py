import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from ENV_FILE if specified, or .env.local, or .env
env_file = os.getenv('ENV_FILE')
if env_file:
    load_dotenv(Path(env_file))
else:
    # Try .env.local first, then fall back to .env
    env_local = Path.cwd() / '.env.local'
    if env_local.exists():
        load_dotenv(env_local)
    else:
        load_dotenv()


# Sendinblue (Brevo) API configuration
SENDINBLUE_API_KEY = os.getenv('SENDINBLUE_API_KEY')
SENDINBLUE_API_HOST = os.getenv('SENDINBLUE_API_HOST')

MAIL_PROVIDER = os.getenv('MAIL_PROVIDER', 'sendinblue')
