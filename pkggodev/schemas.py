from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class Record(BaseModel):
    """Parsed records are immutable once the page parse completes."""
    model_config = ConfigDict(frozen=True)

class Package(Record):
    package: str
    is_module: bool = False
    is_package: bool = False
    version: Optional[str] = None
    published: Optional[str] = Field(None, description="Publish date in YYYY-MM-DD format")
    license: Optional[str] = None
    has_valid_go_mod_file: bool = False
    has_redistributable_license: bool = False
    has_tagged_version: bool = False
    has_stable_version: bool = False
    repository: Optional[str] = Field(None, description="Source repository URL")

class Version(Record):
    major_version: str = Field("", description="Carried forward from the last non-empty major label")
    full_version: str = ""
    date: str = Field(description="Date in YYYY-MM-DD format")

class Versions(Record):
    package: str
    versions: List[Version] = Field(default_factory=list, description="Newest first, as listed")

class SearchResult(Record):
    package: str
    version: str = Field("", description="Blank when the listing truncates a pseudo-version")
    published: str = Field(description="Date in YYYY-MM-DD format")
    imported_by: int = 0
    license: str = ""
    synopsis: str = ""

class SearchResults(Record):
    query: str
    results: List[SearchResult] = Field(default_factory=list, description="Relevance order")

class ImportedBy(Record):
    package: str
    imported_by: List[str] = Field(default_factory=list)

class License(Record):
    name: str
    source: str = ""
    full_text: str = ""

class Change(Record):
    url: str
    symbol: str
    symbol_synopsis: str = ""
