"""Prompt kinds for guided flows.

Each kind carries the context captured when the prompt was opened (a target revision, a default
operation) and turns the submitted text into `jj` tokens.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from jk.errors import PromptInputError
from jk.flow import builders


class PromptKind(ABC):
    """Resolver for one guided prompt."""

    def resolve(self, text: str) -> list[str]:
        """Convert submitted text into tokens, raising `PromptInputError` on invalid input."""
        return self.to_tokens(text.strip())

    @abstractmethod
    def to_tokens(self, text: str) -> list[str]: ...


# Messages


@dataclass(frozen=True)
class NewMessage(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return ["new", "-m", text] if text else ["new"]


@dataclass(frozen=True)
class DescribeMessage(PromptKind):
    revision: str

    def to_tokens(self, text: str) -> list[str]:
        if not text:
            raise PromptInputError("description is required")
        tokens = ["describe", "-m", text]
        if self.revision != "@":
            tokens.append(self.revision)
        return tokens


@dataclass(frozen=True)
class CommitMessage(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return ["commit", "-m", text] if text else ["commit"]


@dataclass(frozen=True)
class MetaeditMessage(PromptKind):
    revision: str

    def to_tokens(self, text: str) -> list[str]:
        if not text:
            raise PromptInputError("metadata message is required")
        return ["metaedit", "-m", text, self.revision]


# Git


@dataclass(frozen=True)
class GitFetchRemote(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return ["git", "fetch", "--remote", text] if text else ["git", "fetch"]


@dataclass(frozen=True)
class GitPushBookmark(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return ["git", "push", "--bookmark", text] if text else ["git", "push"]


# Bookmarks


@dataclass(frozen=True)
class BookmarkCreate(PromptKind):
    target_revision: str

    def to_tokens(self, text: str) -> list[str]:
        return builders.bookmark_target_command(
            "create", text, self.target_revision, empty_message="bookmark name required", target_flag="-r"
        )


@dataclass(frozen=True)
class BookmarkSet(PromptKind):
    target_revision: str

    def to_tokens(self, text: str) -> list[str]:
        return builders.bookmark_target_command(
            "set", text, self.target_revision, empty_message="bookmark name required", target_flag="-r"
        )


@dataclass(frozen=True)
class BookmarkMove(PromptKind):
    target_revision: str

    def to_tokens(self, text: str) -> list[str]:
        return builders.bookmark_target_command(
            "move", text, self.target_revision, empty_message="bookmark name required", target_flag="--to"
        )


@dataclass(frozen=True)
class BookmarkDelete(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return builders.bookmark_names_command("delete", text)


@dataclass(frozen=True)
class BookmarkForget(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return builders.bookmark_names_command("forget", text)


@dataclass(frozen=True)
class BookmarkRename(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return builders.bookmark_rename_command(text)


@dataclass(frozen=True)
class BookmarkTrack(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return builders.bookmark_track_command("track", text)


@dataclass(frozen=True)
class BookmarkUntrack(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return builders.bookmark_track_command("untrack", text)


# Tags


@dataclass(frozen=True)
class TagSet(PromptKind):
    default_revision: str

    def to_tokens(self, text: str) -> list[str]:
        return builders.tag_set_command(text, self.default_revision)


@dataclass(frozen=True)
class TagDelete(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return builders.tag_delete_command(text)


# History rewriting


@dataclass(frozen=True)
class RebaseDestination(PromptKind):
    source_revision: str

    def to_tokens(self, text: str) -> list[str]:
        if not text:
            raise PromptInputError("destination revset is required")
        return ["rebase", "-r", self.source_revision, "-d", text]


@dataclass(frozen=True)
class SquashInto(PromptKind):
    from_revision: str

    def to_tokens(self, text: str) -> list[str]:
        return ["squash", "--from", self.from_revision, "--into", text or "@-"]


@dataclass(frozen=True)
class SplitFileset(PromptKind):
    revision: str

    def to_tokens(self, text: str) -> list[str]:
        if not text:
            raise PromptInputError("split fileset is required (for example: src/main.rs)")
        return ["split", "-r", self.revision, text]


@dataclass(frozen=True)
class RestoreFrom(PromptKind):
    target_revision: str

    def to_tokens(self, text: str) -> list[str]:
        return ["restore", "--from", text or "@-", "--to", self.target_revision]


@dataclass(frozen=True)
class RevertRevisions(PromptKind):
    default_revisions: str
    onto_revision: str = "@"

    def to_tokens(self, text: str) -> list[str]:
        return ["revert", "-r", text or self.default_revisions, "-o", self.onto_revision]


# Operations


@dataclass(frozen=True)
class OperationRestore(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        if not text:
            raise PromptInputError("operation id is required")
        return ["operation", "restore", text]


@dataclass(frozen=True)
class OperationRevert(PromptKind):
    default_operation: str = "@"

    def to_tokens(self, text: str) -> list[str]:
        operation = text or self.default_operation
        if operation == "@":
            return ["operation", "revert"]
        return ["operation", "revert", operation]


# Workspaces


@dataclass(frozen=True)
class WorkspaceAdd(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return builders.workspace_add_command(text)


@dataclass(frozen=True)
class WorkspaceForget(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return builders.workspace_forget_command(text)


@dataclass(frozen=True)
class WorkspaceRename(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        if not text:
            raise PromptInputError("workspace name is required")
        return ["workspace", "rename", text]


# Files


@dataclass(frozen=True)
class FileTrack(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return builders.file_paths_command("track", text)


@dataclass(frozen=True)
class FileUntrack(PromptKind):
    def to_tokens(self, text: str) -> list[str]:
        return builders.file_paths_command("untrack", text)


@dataclass(frozen=True)
class FileChmod(PromptKind):
    default_revision: str

    def to_tokens(self, text: str) -> list[str]:
        return builders.file_chmod_command(text, self.default_revision)
