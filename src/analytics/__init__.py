"""
Habit Analytics Package
=======================
Pure, side-effect-free computations over a sequence of DailyLogEntry.

Modules:
  statistics  - mean/median/variance/std dev, moving averages, trends
  correlation - pairwise Pearson across tracked dimensions
  streaks     - consecutive-day logging streak
  wellness    - weighted wellness score
  insights    - ordered rule-based insight generator
"""
