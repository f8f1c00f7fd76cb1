"""
schemas/ — dataclasses shared by the planner, the store and the API.

  schemas.settings — enums, TourWizardSettings, UserSettings
  schemas.sight    — Sight
  schemas.tour     — TourStop, Tour
"""
