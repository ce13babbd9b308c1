"""Sequence a robot arm and its gripper through pick-and-place waypoint cycles."""
