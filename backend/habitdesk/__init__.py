"""
HabitDesk - personal habit and to-do tracker
"""
__version__ = "0.1.0"
