from skillpath.services.scoring import calculate_points_reward, compute_level, level_label
from skillpath.services.seeding import seed_all

__all__ = ["calculate_points_reward", "compute_level", "level_label", "seed_all"]
