import sys
import os

# Add your project directory to the sys.path
project_home = os.environ.get('MEAL_PLANNER_HOME', os.path.dirname(os.path.abspath(__file__)))
if project_home not in sys.path:
    sys.path.insert(0, project_home)

# Import the application factory
from app import create_app

application = create_app(os.environ.get('FLASK_ENV', 'production'))
