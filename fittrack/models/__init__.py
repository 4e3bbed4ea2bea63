from .user import User
from .workout import Workout, Intensity, EXERCISE_TYPES
from .goal import Goal, GoalTargetType, GoalPeriod, GoalStatus

__all__ = [
    'User',
    'Workout',
    'Intensity',
    'EXERCISE_TYPES',
    'Goal',
    'GoalTargetType',
    'GoalPeriod',
    'GoalStatus'
]
