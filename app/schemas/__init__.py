from .user import UserCreate, UserLogin, UserOut, UserSummary, UserRoleUpdate
from .tokens import Token
from .organization import OrganizationCreate, OrganizationOut, StaffInvite
from .staff import StaffCreate, StaffUpdate, StaffOut, ManagerUpdate
from .hierarchy import HierarchyNodeOut, OrgChart
from .goal import GoalCreate, GoalUpdate, GoalOut, SubtaskCreate, SubtaskUpdate, SubtaskOut
from .corporate_task import CorporateTaskCreate, CorporateTaskUpdate, CorporateTaskOut, MyAssignments
from .project import ProjectCreate, ProjectUpdate, ProjectOut, TimelineItemCreate, TimelineItemOut
from .entity_link import EntityLinkCreate, EntityLinkDelete, EntityLinkOut, LinkedEntity
from .deadline import DeadlineItem
