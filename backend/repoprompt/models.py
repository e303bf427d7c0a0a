from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class PathEntry(BaseModel):
    model_config = ConfigDict(extra="ignore") # GitHub also sends sha, mode, size, url

    path: str
    type: str # 'blob', 'tree' (or 'commit' for submodules)


class TreeNode(BaseModel):
    name: Optional[str] = None # None only for the root
    path: Optional[str] = None # Set on files only
    children: Optional[List['TreeNode']] = None # None for files

    @property
    def is_dir(self) -> bool:
        return self.children is not None

TreeNode.model_rebuild() # For recursive Pydantic models


class RepoTarget(BaseModel):
    owner: str
    repo: str
    branch: Optional[str] = None # None means the repository's default branch


class FileContent(BaseModel):
    path: str
    content: str
