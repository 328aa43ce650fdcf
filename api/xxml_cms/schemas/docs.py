"""Documentation Pydantic schemas: seed dataset, editor inputs, and responses."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# --- Seed dataset ---


class MethodData(BaseModel):
    """Method entry of the seed dataset."""

    name: str = Field(min_length=1)
    category: str = "Methods"
    params: str = ""
    returns: str = ""
    description: str = ""


class ExampleData(BaseModel):
    """Code sample entry of the seed dataset."""

    title: str | None = None
    code: str = Field(min_length=1)
    filename: str | None = None
    show_lines: bool = False


class ClassData(BaseModel):
    """Class entry of the seed dataset; list order becomes sort order."""

    name: str
    slug: str
    description: str
    constraints: str | None = None
    methods: list[MethodData] = Field(default_factory=list)
    examples: list[ExampleData] = Field(default_factory=list)


class ModuleData(BaseModel):
    """Module entry of the seed dataset."""

    name: str
    slug: str
    description: str
    import_path: str
    classes: list[ClassData] = Field(default_factory=list)


class SeedSummary(BaseModel):
    """Row totals after a seeding run."""

    modules: int
    classes: int
    methods: int
    examples: int


# --- Editor inputs ---


class MethodInput(MethodData):
    """Method as submitted by the documentation editor."""

    sort_order: int = 0


class ExampleInput(ExampleData):
    """Example as submitted by the documentation editor."""

    sort_order: int = 0


class ModuleInput(BaseModel):
    """Request to create a module."""

    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1)
    import_path: str = Field(min_length=1)
    sort_order: int = 0


class ModuleUpdate(BaseModel):
    """Partial module update; unset fields are left alone."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    slug: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1)
    import_path: str | None = Field(default=None, min_length=1)
    sort_order: int | None = None


class ClassInput(BaseModel):
    """Request to create a class with its methods and examples."""

    module_id: UUID
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1)
    constraints: str | None = None
    sort_order: int = 0
    methods: list[MethodInput] = Field(default_factory=list)
    examples: list[ExampleInput] = Field(default_factory=list)


class ClassUpdate(BaseModel):
    """
    Partial class update.

    ``methods`` and ``examples``, when given, replace the stored lists.
    """

    name: str | None = Field(default=None, min_length=1, max_length=100)
    slug: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1)
    constraints: str | None = None
    sort_order: int | None = None
    methods: list[MethodInput] | None = None
    examples: list[ExampleInput] | None = None


class ReorderRequest(BaseModel):
    """Ids in their new display order."""

    ordered_ids: list[UUID]


# --- Responses ---


class MethodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    category: str
    params: str
    returns: str
    description: str
    sort_order: int


class ExampleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str | None
    code: str
    filename: str | None
    show_lines: bool
    sort_order: int


class ClassSummary(BaseModel):
    """Class entry for navigation listings."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    name: str
    description: str


class ModuleRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    name: str
    import_path: str


class ClassResponse(BaseModel):
    """Class with its methods and examples."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    module_id: UUID
    slug: str
    name: str
    description: str
    constraints: str | None
    sort_order: int
    methods: list[MethodResponse]
    examples: list[ExampleResponse]


class ClassDetailResponse(ClassResponse):
    """Class page payload including its owning module."""

    module: ModuleRef


class ModuleSummary(BaseModel):
    """Module entry for the sidebar, with class summaries."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    name: str
    description: str
    import_path: str
    sort_order: int
    classes: list[ClassSummary]


class ModuleResponse(BaseModel):
    """Module page payload with full classes."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    name: str
    description: str
    import_path: str
    sort_order: int
    classes: list[ClassResponse]


class ModuleInfo(BaseModel):
    """Module without its classes (editor responses)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    name: str
    description: str
    import_path: str
    sort_order: int
