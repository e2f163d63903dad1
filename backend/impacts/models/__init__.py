from impacts.models.user import User
from impacts.models.lookup import ActivityCategory, SimulationType, FeedbackFormType
from impacts.models.activity import Activity
from impacts.models.milestone import MilestoneCategory, MilestoneItem, UserMilestone
from impacts.models.readiness import ReadinessAssessment

__all__ = ["User", "ActivityCategory", "SimulationType", "FeedbackFormType", "Activity",
           "MilestoneCategory", "MilestoneItem", "UserMilestone", "ReadinessAssessment"]
