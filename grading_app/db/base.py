# /grading_app/db/base.py

# Central registry for all SQLAlchemy models. Importing them here makes sure
# the Base metadata knows every table when Alembic or `create_all` runs.

from .base_class import Base

from .models.user_models import User
from .models.simulation_models import Simulation, Question, SimulationResult, OpenAnswer
