import os

from domain.models import CopyPlan, FileMatch
from domain.rules import resolve_collision


class PlannerService:
    def __init__(self, logger=None):
        self.logger = logger

    def plan(self, match: FileMatch, dest_root: str) -> CopyPlan:
        """Pick a destination name in dest_root that is free right now."""
        new_name, suffix = resolve_collision(dest_root, match.name)
        if suffix and self.logger:
            self.logger.log(f"[PLAN] {match.name} exists in destination, using {new_name}")
        return CopyPlan(match=match, dest_path=os.path.join(dest_root, new_name), collision_suffix=suffix)
