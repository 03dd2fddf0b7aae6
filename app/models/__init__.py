from .user import User
from .organization import Organization, OrganizationStaff
from .project import Project, TimelineItem
from .goal import OrganizationGoal, GoalSubtask
from .corporate_task import CorporateTask
from .entity_link import EntityLink
