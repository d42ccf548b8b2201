from pydantic import BaseModel, Field


class RepositorySummary(BaseModel):
    """One repository as supplied by the caller, after normalization"""

    name: str
    description: str = ""
    language: str = ""
    stars: int = 0
    forks: int = 0
    commits: int = 0
    topics: list[str] = Field(default_factory=list)
    tech: list[str] = Field(default_factory=list)
    url: str = ""
    owner: str = ""
    readme_snippet: str = ""


class RepositoryListing(BaseModel):
    """Lightweight view of a GitHub repository for the repository picker"""

    id: int
    name: str
    full_name: str
    description: str | None = None
    html_url: str
    url: str
    language: str | None = None
    topics: list[str] = Field(default_factory=list)
    stars: int = 0
    forks: int = 0
    owner: str = ""
    default_branch: str = "main"
    private: bool = False
