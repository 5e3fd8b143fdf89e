from enum import StrEnum


class Difficulty(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ObjectType(StrEnum):
    TABLE = "table"
    TABLE_EXTENSION = "tableextension"
    PAGE = "page"
    PAGE_EXTENSION = "pageextension"
    PAGE_CUSTOMIZATION = "pagecustomization"
    CODEUNIT = "codeunit"
    REPORT = "report"
    REPORT_EXTENSION = "reportextension"
    QUERY = "query"
    XMLPORT = "xmlport"
    ENUM = "enum"
    ENUM_EXTENSION = "enumextension"
    INTERFACE = "interface"
    PERMISSION_SET = "permissionset"
    PERMISSION_SET_EXTENSION = "permissionsetextension"
    CONTROL_ADDIN = "controladdin"
    PROFILE = "profile"
    ENTITLEMENT = "entitlement"


ALL_DIFFICULTIES: set[str] = {d.value for d in Difficulty}

ALL_OBJECT_TYPES: set[str] = {o.value for o in ObjectType}


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class LoadErrorKind(StrEnum):
    FRONT_MATTER = "front_matter"
    ENCODING = "encoding"
    READ = "read"
