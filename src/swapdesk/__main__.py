"""Entry point for running as module: python -m swapdesk"""

# Load .env file before importing anything else
from dotenv import load_dotenv
load_dotenv()

from swapdesk.main import main

if __name__ == "__main__":
    main()
