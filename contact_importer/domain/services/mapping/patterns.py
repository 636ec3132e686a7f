"""Static pattern tables for field mapping and value classification.

The tables are assembled once into an immutable ``PatternLibrary`` that the
classifier and the mapping engine share by reference. Nothing here is
mutated at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
import re
from types import MappingProxyType

from .utils import normalize_field_name

FIELD_SYNONYMS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "имя": (
            "name", "first_name", "given_name", "имя", "им", "fname", "first",
            "имя_клиента", "клиент", "client_name", "contact_name", "firstname",
            "forename", "personal_name", "имя_сотрудника", "employee_name",
            "имя_пользователя", "user_name", "имя_контакта", "contact_firstname",
            "person_name", "имя_человека",
        ),
        "фамилия": (
            "surname", "last_name", "family_name", "фамилия", "lname", "last",
            "фамилию", "фамилия_клиента", "client_lastname", "contact_lastname",
            "lastname", "familyname", "surname_name", "фамилия_сотрудника",
            "employee_lastname", "фамилия_пользователя", "user_lastname",
            "фамилия_контакта", "person_lastname", "second_name",
        ),
        "электронная_почта": (
            "email", "mail", "e_mail", "email_address", "почта", "мыло", "e-mail",
            "mail_address", "email_contact", "contact_email", "emailaddr",
            "electronic_mail", "mail_addr", "email_addr", "электронный_адрес",
            "email_адрес", "user_email", "work_email", "personal_email",
            "business_email", "mail_box", "почтовый_ящик", "electronicmail",
            "электроннаяпочта", "электронная почта", "адрес_электронной_почты",
            "адрес почты", "электронная_почта_адрес", "email_пользователя",
            "контактная_почта", "рабочая_почта", "личная_почта",
            "персональная_почта",
        ),
        "телефон": (
            "phone", "telephone", "mobile", "cell", "телефон", "тел",
            "phone_number", "mobile_phone", "cell_phone", "contact_phone", "tel",
            "phone_no", "telephone_number", "mobile_number", "cell_number",
            "phone_num", "tel_number", "контактный_телефон", "work_phone",
            "home_phone", "business_phone", "personal_phone", "phone_mobile",
            "мобильный", "сотовый", "номер_телефона", "phone_contact", "tel_no",
            "phone_ext", "telephone_ext", "phone_extension", "рабочий_телефон",
            "домашний_телефон", "телефонный_номер", "мобильный_телефон",
            "рабочий_номер", "личный_телефон",
        ),
        "компания": (
            "company", "organization", "org", "firm", "компания", "организация",
            "workplace", "employer", "business", "corp", "corporation",
            "work_company", "client_company", "company_name", "org_name",
            "firm_name", "business_name", "corp_name", "organization_name",
            "workplace_name", "employer_name", "название_компании",
            "организация_работы", "фирма", "предприятие", "работодатель",
            "бизнес", "корпорация", "юрлицо", "client_organization",
            "partner_company", "vendor_company", "supplier_company",
            "service_company", "client_firm", "компания_работодателя",
            "фирма_работодателя", "предприятие_работы",
        ),
        "должность": (
            "position", "job_title", "role", "title", "должность", "позиция",
            "job", "position_title", "job_role", "work_position", "role_title",
            "position_name", "role_name", "work_role", "job_position",
            "employment_title", "work_title", "position_role",
            "должность_работы", "профессия", "специальность",
            "рабочая_позиция", "трудовая_функция", "job_function",
            "work_function", "position_level", "job_level", "role_level",
            "seniority", "rank", "grade", "job_grade", "должность_работника",
            "профессиональный_статус", "должностные_обязанности",
        ),
        "город": (
            "city", "town", "location", "город", "city_name", "town_name",
            "work_city", "contact_city", "city_location", "town_location",
            "место", "населенный_пункт", "городок", "location_city",
            "address_city", "work_town", "hometown", "resident_city",
            "living_city", "city_of_residence", "город_проживания",
            "город_жительства", "местожительство",
        ),
        "страна": (
            "country", "nation", "страна", "country_code", "country_name",
            "nation_name", "country_region", "nation_region", "государство",
            "страна_код", "country_iso", "nation_iso", "country_of_residence",
            "nationality", "citizenship", "гражданство", "родина",
            "страна_гражданства",
        ),
        "адрес": (
            "address", "addr", "адрес", "address_line", "street_address",
            "work_address", "contact_address", "address_line1", "address_line2",
            "street", "улица", "адрес_проживания", "home_address",
            "workplace_address", "full_address", "complete_address",
            "address_location", "location_address", "resident_address",
            "почтовый_адрес", "адрес_регистрации", "юридический_адрес",
        ),
        "телеграмма": (
            "telegram", "tg", "telegram_handle", "телеграм", "tg_username",
            "telegram_user", "tg_handle", "telegram_id", "tg_id",
            "telegram_username", "telegram_link", "telegram_profile",
            "tg_profile", "telegram_account", "tg_account", "телеграм_аккаунт",
            "телеграм_профиль", "telegram_никнейм", "tg_никнейм",
            "телеграм_контакт", "telegram_контакт", "телеграммный_адрес",
            "telegram_адрес",
        ),
        "linkedin_url": (
            "linkedin", "linked_in", "linkedin_profile", "linkedin_url",
            "linkedin_link", "social_linkedin", "linkedin_handle",
            "linkedin_username", "linkedin_id", "linkedin_account",
            "linkedin_profile_url", "linkedin_profile_link", "linkedin_network",
            "linkedin_social", "linkedin_connect", "linkedin_профиль",
            "linkedin_контакт", "linkedin_адрес", "linkedin_ссылка",
        ),
        "создано_в": (
            "created_at", "created", "creation_date", "date_created", "создано",
            "created_time", "timestamp_created", "date_added",
            "creation_timestamp", "date_of_creation", "time_created",
            "created_on", "creation_time", "timestamp_creation", "date_inserted",
            "time_inserted", "inserted_at", "inserted_on", "registration_date",
            "signup_date", "дата_создания", "время_создания",
            "момент_создания", "когда_создано",
        ),
        "обновлено_в": (
            "updated_at", "updated", "modification_date", "date_updated",
            "обновлено", "modified", "timestamp_updated", "date_modified",
            "modification_timestamp", "date_of_modification", "time_updated",
            "updated_on", "modification_time", "timestamp_modification",
            "last_updated", "last_modified", "recently_updated", "date_changed",
            "time_changed", "changed_at", "дата_обновления", "время_обновления",
            "момент_обновления", "когда_обновлено",
        ),
        "день_рождения": (
            "birthday", "birth_date", "dob", "date_of_birth", "день_рождения",
            "birthday_date", "birth_day", "birth_timestamp", "time_of_birth",
            "born_on", "born_date", "birth_datetime", "date_born",
            "birthday_timestamp", "dob_date", "birth_day_date", "дата_рождения",
            "время_рождения",
        ),
        "аватар_url": (
            "avatar", "photo", "picture", "image_url", "profile_image", "аватар",
            "фото", "profile_photo", "user_photo", "picture_url",
            "profile_picture", "user_avatar", "avatar_image", "photo_url",
            "picture_link", "image_link", "profile_pic", "user_picture",
            "avatar_url", "photo_link", "image_src", "profile_src", "avatar_src",
            "фотография", "аватарка", "изображение", "картинка",
            "фотография_пользователя", "profile_image_url",
        ),
        "примечания": (
            "notes", "comments", "description", "remarks", "примечания",
            "заметки", "note", "comment", "user_notes", "additional_notes",
            "extra_notes", "special_notes", "important_notes", "personal_notes",
            "work_notes", "description_text", "comment_text", "note_text",
            "remark_text", "annotation", "memo", "memorandum",
            "дополнительная_информация", "комментарии", "описание", "замечания",
            "пояснения", "bio", "биография", "about", "about_me", "profile",
            "profile_info", "personal_info", "summary", "professional_summary",
            "work_description", "personal_description", "profile_description",
            "био", "обо_мне", "профиль",
        ),
        "источник": (
            "source", "origin", "from", "источник", "source_system",
            "data_source", "origin_source", "source_type", "origin_type",
            "source_category", "origin_category", "source_name", "origin_name",
            "source_reference", "origin_reference", "source_id", "origin_id",
            "source_location", "origin_location", "источник_данных",
            "происхождение", "откуда", "место_источника",
        ),
        "идентификатор": (
            "id", "identifier", "uuid", "primary_key", "идентификатор",
            "user_id", "record_id", "entity_id", "unique_id",
            "unique_identifier", "primary_identifier", "key_id", "main_id",
            "entity_identifier", "record_identifier", "object_id", "element_id",
            "item_id", "reference_id", "guid", "unique_key",
            "идентификационный_номер", "уникальный_идентификатор",
            "первичный_ключ",
        ),
    }
)

TYPE_COMPATIBILITY: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "VARCHAR": ("text", "string", "varchar", "char", "nvarchar"),
        "TEXT": ("text", "string", "longtext", "mediumtext", "clob"),
        "INTEGER": ("int", "integer", "number", "numeric", "bigint", "smallint"),
        "BOOLEAN": ("bool", "boolean", "bit", "yesno", "flag"),
        "TIMESTAMPTZ": (
            "timestamp", "datetime", "date", "time", "created_at", "updated_at",
        ),
        "UUID": ("uuid", "guid", "unique_id", "uniqueidentifier"),
        "JSONB": ("json", "jsonb", "object", "array", "text"),
        "DATE": ("date", "datetime", "timestamp"),
    }
)

# (target type fragment, source type fragment, score) pairs checked after the
# compatibility classes fail to intersect.
CROSS_TYPE_SCORES: tuple[tuple[str, str, float], ...] = (
    ("VARCHAR", "TEXT", 0.9),
    ("TEXT", "VARCHAR", 0.9),
    ("INTEGER", "BIGINT", 0.8),
)
INCOMPATIBLE_TYPE_SCORE = 0.1

VALUE_PATTERNS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "email": (
            r"^[^\s@]+@[^\s@]+\.[^\s@]+$",
            r"\w+@\w+\.\w+",
            r".*@.*\..*",
            r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$",
        ),
        "phone": (
            r"^\+?\d{10,15}$",
            r"\d{3}[-.\s]?\d{3}[-.\s]?\d{4}",
            r"\(\d{3}\)\s*\d{3}[-.\s]?\d{4}",
            r"^\+7\d{10}$",
            r"^8\d{10}$",
        ),
        "name": (
            r"^[A-Za-zА-Яа-яЁё\s\-']+$",
            r"^[A-Z][a-z]+\s[A-Z][a-z]+$",
            r"^[А-ЯЁ][а-яё]+\s[А-ЯЁ][а-яё]+$",
            r"^[A-Za-zА-Яа-яЁё]{2,50}$",
            r"^[A-Z][a-z]+\s[A-Z]\.?\s*[A-Za-z]+$",
        ),
        "company": (
            r"^[A-Za-zА-Яа-яЁё0-9\s\-.&,()]+$",
            r"(?i)(Inc|Corp|LLC|ООО|ЗАО|ИП|Ltd|GmbH|SARL)",
            r"^[A-Z][a-zA-Z\s]+",
            r"(?i)^[A-Za-zА-Яа-яЁё]+(?:\s+(?:Group|Solutions|Technologies|Systems|Digital|Agency|Studio))",
        ),
        "telegram": (
            r"^@[a-zA-Z0-9_]{3,32}$",
            r"^[a-zA-Z0-9_]{3,32}$",
            r"^t\.me/[a-zA-Z0-9_]{3,32}$",
            r"t\.me/[a-zA-Z0-9_]+",
            r"@[a-zA-Z0-9_]+",
            r"^[a-zA-Z0-9_]+$",
            r"https?://t\.me/[a-zA-Z0-9_]+",
        ),
        "linkedin": (
            r"^https?://(www\.)?linkedin\.com/in/[a-zA-Z0-9-]+",
            r"^linkedin\.com/in/[a-zA-Z0-9-]+",
            r"/in/[a-zA-Z0-9-]+",
            r"linkedin",
            r"^[a-zA-Z0-9-]{3,100}$",
        ),
        "instagram": (
            r"^https?://(www\.)?instagram\.com/[a-zA-Z0-9_.]+",
            r"^instagram\.com/[a-zA-Z0-9_.]+",
            r"instagram\.com",
            r"@[a-zA-Z0-9_.]+",
            r"^[a-zA-Z0-9_.]{3,30}$",
        ),
        "twitter": (
            r"^https?://(www\.)?twitter\.com/[a-zA-Z0-9_]+",
            r"^twitter\.com/[a-zA-Z0-9_]+",
            r"twitter\.com",
            r"@[a-zA-Z0-9_]+",
            r"^[a-zA-Z0-9_]{3,15}$",
        ),
        "social_media": (
            r"https?://(www\.)?(facebook|instagram|twitter|linkedin|tiktok|youtube|github)\.com/[a-zA-Z0-9_.-]+",
            r"@(?:instagram|twitter|tiktok|github)[a-zA-Z0-9_.]+",
            r"(?i)(facebook|instagram|twitter|linkedin|tiktok|youtube|github)",
            r"(?i)social|profile|account",
        ),
        "description": (
            r"^.{10,}$",
            r"^[A-Za-zА-Яа-яЁё0-9\s\-.,!?;:()]+$",
            r".{50,}",
            r"(?i)(?:опыт|работа|навыки|проекты|образование|квалификация)",
            r"(?i)(?:experience|skills|projects|education|qualification)",
        ),
        "position": (
            r"(?i)^(?:Senior|Junior|Lead|Principal|Chief|Head|Director|Manager|Specialist|Engineer|Developer|Designer|Analyst|Consultant)",
            r"(?i)(?:Developer|Engineer|Manager|Director|Analyst|Designer|Specialist|Consultant)",
            r"(?i)(?:Senior|Junior|Lead|Principal|Chief|Head)\s+(?:Developer|Engineer|Manager|Designer)",
            r"^[A-Za-zА-Яа-яЁё\s]{5,100}$",
        ),
    }
)

CATEGORY_NAMES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "email": (
            "email", "mail", "e_mail", "email_address", "почта", "мыло",
            "электронная_почта", "электроннаяпочта", "electronic_mail",
        ),
        "phone": (
            "phone", "telephone", "mobile", "cell", "телефон", "тел",
            "phone_number", "телефонный_номер",
        ),
        "name": (
            "name", "first_name", "last_name", "имя", "фамилия",
            "имя_пользователя", "фамилия_пользователя",
        ),
        "company": (
            "company", "organization", "org", "компания", "организация",
            "фирма", "предприятие",
        ),
        "position": (
            "position", "job_title", "role", "title", "должность", "позиция",
            "должность_работника",
        ),
        "telegram": (
            "telegram", "телеграмма", "tg", "телеграм", "telegram_handle",
            "tg_username", "telegram_user", "tg_handle",
        ),
        "linkedin": (
            "linkedin", "linkedin_url", "linkedin_profile", "linkedin_profile_url",
            "linkedin_link", "linkedin_handle", "linkedin_username",
        ),
        "instagram": (
            "instagram", "instagram_url", "instagram_profile", "instagram_handle",
            "instagram_username", "insta", "ig",
        ),
        "twitter": (
            "twitter", "twitter_url", "twitter_profile", "twitter_handle",
            "twitter_username", "tw",
        ),
        "social_media": (
            "social", "social_media", "social_links", "social_profiles",
            "social_accounts", "соцсети", "социальные_сети",
        ),
        "description": (
            "description", "bio", "notes", "comments", "remarks", "описание",
            "био", "заметки", "комментарии", "примечания", "about", "summary",
            "profile",
        ),
    }
)

CATEGORY_PARTIAL_NAMES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "email": (
            "emailaddr", "mailaddr", "email_contact", "contact_email",
            "электронная_почта", "адрес_электронной_почты",
        ),
        "phone": (
            "phone_num", "tel_number", "contact_phone", "mobile_phone",
            "телефонный_номер", "номер_телефона",
        ),
        "name": (
            "fname", "lname", "firstname", "lastname", "person_name",
            "имя_пользователя", "фамилия_пользователя",
        ),
        "company": (
            "company_name", "org_name", "work_company", "client_company",
            "название_компании", "компания_работодателя",
        ),
        "position": (
            "job_position", "work_role", "position_title", "job_role",
            "должность_работника", "рабочая_позиция",
        ),
        "telegram": (
            "telegram_username", "tg_username", "telegram_user", "tg_user",
            "telegram_account", "tg_account", "телеграм_аккаунт",
        ),
        "linkedin": (
            "linkedin_profile_url", "linkedin_link", "linkedin_account",
            "linkedin_personal", "linkedin_business",
        ),
        "instagram": (
            "instagram_profile", "instagram_account", "instagram_user",
            "instagram_handle", "insta_profile",
        ),
        "twitter": (
            "twitter_profile", "twitter_account", "twitter_user",
            "twitter_handle", "twitter_link",
        ),
        "social_media": (
            "social_links", "social_profiles", "social_accounts",
            "social_media_links", "social_networks",
        ),
        "description": (
            "description_text", "bio_text", "profile_description",
            "personal_description", "work_description", "professional_summary",
            "about_me", "profile_info", "personal_info",
        ),
    }
)

SEMANTIC_GROUPS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "email": ("communication", "contact", "message", "сообщение", "контакт"),
        "phone": ("communication", "contact", "call", "звонок", "связь"),
        "name": ("person", "individual", "identity", "личность", "идентичность"),
        "company": ("business", "work", "organization", "бизнес", "работа"),
        "position": ("role", "function", "job", "роль", "функция"),
        "telegram": (
            "messaging", "chat", "social", "messenger", "сообщение", "чат",
            "соцсеть", "мессенджер",
        ),
        "linkedin": (
            "professional", "networking", "career", "business", "work",
            "профессиональный", "карьера", "бизнес",
        ),
        "instagram": (
            "visual", "photo", "image", "social", "media", "визуальный", "фото",
            "изображение",
        ),
        "twitter": (
            "microblog", "social", "post", "tweet", "микроблог", "социальный",
            "пост",
        ),
        "social_media": (
            "social", "network", "profile", "account", "социальный", "сеть",
            "профиль", "аккаунт",
        ),
        "description": (
            "text", "content", "information", "details", "текст", "содержание",
            "информация", "описание", "summary", "profile", "about",
        ),
    }
)

CONTEXT_BUCKETS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "personal": (
            "personal", "individual", "person", "личный", "персональный",
            "индивидуальный", "contact", "communication", "контакт", "связь",
            "общение",
        ),
        "professional": (
            "work", "job", "career", "business", "работа", "карьера", "бизнес",
            "профессия", "company", "organization", "компания", "организация",
            "фирма", "предприятие",
        ),
        "technical": (
            "tech", "technical", "it", "software", "тех", "технический", "софт",
            "программный", "developer", "engineer", "programmer", "разработчик",
            "инженер", "программист",
        ),
    }
)

# Categories a context bucket is allowed to boost.
CONTEXT_RELEVANCE: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "personal": frozenset({"email", "phone", "name"}),
        "professional": frozenset({"company", "position"}),
        "technical": frozenset({"position"}),
    }
)

HIERARCHY_KEYWORDS: tuple[str, ...] = (
    "junior", "middle", "senior", "lead", "principal", "chief", "head",
    "director", "младший", "старший", "ведущий", "главный", "руководитель",
    "директор",
)

DEPARTMENT_KEYWORDS: tuple[str, ...] = (
    "it", "hr", "sales", "marketing", "finance", "operations", "legal", "ит",
    "кадры", "продажи", "маркетинг", "финансы", "операции", "юридический",
)

PROFESSIONAL_KEYWORDS_RE = re.compile(
    r"(?:опыт|работа|навыки|проекты|образование|квалификация|"
    r"experience|skills|projects|education|qualification)",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class PatternLibrary:
    """Read-only bundle of every table the heuristics consult."""

    synonyms: Mapping[str, tuple[str, ...]]
    type_compatibility: Mapping[str, tuple[str, ...]]
    value_patterns: Mapping[str, tuple[re.Pattern[str], ...]]
    category_names: Mapping[str, frozenset[str]]
    category_partial_names: Mapping[str, tuple[str, ...]]
    semantic_groups: Mapping[str, tuple[str, ...]]
    context_buckets: Mapping[str, tuple[str, ...]]
    context_relevance: Mapping[str, frozenset[str]]
    hierarchy_keywords: tuple[str, ...]
    department_keywords: tuple[str, ...]
    synonym_index: Mapping[str, str]

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self.value_patterns)

    def canonical_name(self, name: str) -> str | None:
        """Canonical target field for ``name``, ignoring case and separators."""
        return self.synonym_index.get(normalize_field_name(name))

    def synonyms_for(self, name: str) -> tuple[str, ...]:
        canonical = self.canonical_name(name)
        if canonical is None:
            return (name,)
        return (canonical, *self.synonyms[canonical])

    def patterns_for(self, category: str) -> tuple[re.Pattern[str], ...]:
        return self.value_patterns.get(category, ())

    def type_members(self, type_tag: str) -> tuple[str, ...]:
        return self.type_compatibility.get(type_tag.upper(), (type_tag.lower(),))

    def type_compatibility_score(self, target_type: str, source_type: str) -> float:
        target_members = {t.lower() for t in self.type_members(target_type)}
        source_members = {s.lower() for s in self.type_members(source_type)}
        if target_members & source_members:
            return 1.0
        target_upper = target_type.upper()
        source_upper = source_type.upper()
        for target_part, source_part, score in CROSS_TYPE_SCORES:
            if target_part in target_upper and source_part in source_upper:
                return score
        return INCOMPATIBLE_TYPE_SCORE


def _build_synonym_index(
    synonyms: Mapping[str, tuple[str, ...]],
) -> dict[str, str]:
    index: dict[str, str] = {}
    for canonical, names in synonyms.items():
        for name in (canonical, *names):
            index.setdefault(normalize_field_name(name), canonical)
    return index


def _compile_patterns(
    patterns: Mapping[str, tuple[str, ...]],
) -> dict[str, tuple[re.Pattern[str], ...]]:
    return {
        category: tuple(re.compile(source) for source in sources)
        for category, sources in patterns.items()
    }


@lru_cache(maxsize=1)
def default_pattern_library() -> PatternLibrary:
    return PatternLibrary(
        synonyms=FIELD_SYNONYMS,
        type_compatibility=TYPE_COMPATIBILITY,
        value_patterns=MappingProxyType(_compile_patterns(VALUE_PATTERNS)),
        category_names=MappingProxyType(
            {
                category: frozenset(normalize_field_name(n) for n in names)
                for category, names in CATEGORY_NAMES.items()
            }
        ),
        category_partial_names=CATEGORY_PARTIAL_NAMES,
        semantic_groups=SEMANTIC_GROUPS,
        context_buckets=CONTEXT_BUCKETS,
        context_relevance=CONTEXT_RELEVANCE,
        hierarchy_keywords=HIERARCHY_KEYWORDS,
        department_keywords=DEPARTMENT_KEYWORDS,
        synonym_index=MappingProxyType(_build_synonym_index(FIELD_SYNONYMS)),
    )
