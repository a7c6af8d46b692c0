from enum import Enum


class LeadStatus(str, Enum):
    NOVO = "Novo"
    AGENDADO = "Agendado"
    COMPARECEU = "Compareceu"
    FECHADO = "Fechado"
    NAO_VEIO = "Não veio"


class OutboundStatus(str, Enum):
    PROSPECTADO = "prospectado"
    ABORDADO = "abordado"
    RESPONDEU = "respondeu"
    INTERESSADO = "interessado"
    PUBLICOU_LINK = "publicou link"
    UPGRADE_LEAD = "upgrade lead"


class InteractionType(str, Enum):
    WHATSAPP = "whatsapp"
    EMAIL = "email"
    INSTAGRAM = "instagram"
    CALL = "call"
    OTHER = "other"


class EventType(str, Enum):
    CLICK = "click"
    LEAD = "lead"
    LEAD_CREATE = "lead_create"
    LEAD_UPDATE = "lead_update"
    LINK_VIEW = "link_view"
    PAGE_VIEW = "page_view"
    QUIZ_SUBMIT = "quiz_submit"
    LINK_GENERATED = "link_generated"


class BlockType(str, Enum):
    BUTTON = "BUTTON"
    FORM = "FORM"
    ADDRESS = "ADDRESS"


class SocialPlatform(str, Enum):
    INSTAGRAM = "INSTAGRAM"
    WHATSAPP = "WHATSAPP"
    YOUTUBE = "YOUTUBE"
    FACEBOOK = "FACEBOOK"
    LINKEDIN = "LINKEDIN"
    TIKTOK = "TIKTOK"
    TWITTER = "TWITTER"


class QuestionType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    EMAIL = "email"
    PHONE = "phone"
    SELECT = "select"
    MULTISELECT = "multiselect"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    BOOLEAN = "boolean"
    SCALE = "scale"
    DATE = "date"


QUESTION_TYPES_WITH_OPTIONS = (
    QuestionType.SELECT,
    QuestionType.MULTISELECT,
    QuestionType.RADIO,
    QuestionType.CHECKBOX,
)


# Colunas do pipeline de leads: id da coluna -> (título, status)
LEAD_PIPELINE_COLUMNS = [
    ("novos", "Novos", LeadStatus.NOVO),
    ("agendados", "Agendados", LeadStatus.AGENDADO),
    ("compareceram", "Compareceram", LeadStatus.COMPARECEU),
    ("fechados", "Fechados", LeadStatus.FECHADO),
    ("naoVieram", "Não vieram", LeadStatus.NAO_VEIO),
]

# No outbound o id da coluna é o próprio status
OUTBOUND_PIPELINE_COLUMNS = [
    ("prospectado", "Prospectado", OutboundStatus.PROSPECTADO),
    ("abordado", "Abordado", OutboundStatus.ABORDADO),
    ("respondeu", "Respondeu", OutboundStatus.RESPONDEU),
    ("interessado", "Interessado", OutboundStatus.INTERESSADO),
    ("publicou link", "Publicou Link", OutboundStatus.PUBLICOU_LINK),
    ("upgrade lead", "Upgrade Lead", OutboundStatus.UPGRADE_LEAD),
]

PAGE_DELETE_CONFIRMATION = "excluir"

DEFAULT_OPENING_SCREEN = {
    "title": "",
    "subtitle": "",
    "description": "",
    "startButtonText": "Começar",
    "showTimeEstimate": False,
    "showQuestionCount": False,
}

DEFAULT_COMPLETION_SCREEN = {
    "title": "Obrigado por participar!",
    "message": "Suas respostas foram registradas com sucesso.",
    "redirectUrl": "",
    "redirectButtonText": "Concluir",
}

GENERIC_ERROR = "Erro ao processar a solicitação"
