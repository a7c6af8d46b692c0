# IMPORTAR TODOS OS MODELOS para que o SQLAlchemy registre no metadata
from app.api.models.user import User
from app.api.models.lead import Lead
from app.api.models.indication import Indication
from app.api.models.event import Event
from app.api.models.page import Page, PageBlock, SocialLink, PageAddress
from app.api.models.quiz import Quiz, QuizQuestion
from app.api.models.outbound import Outbound, Clinic, ContactInteraction, outbound_clinics
from app.api.models.interest_option import InterestOption
from app.api.models.cycle import Cycle, CycleWeek, WeekGoal, KeyResult, CycleDay, CycleTask
