from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core.exceptions import UnknownOrganizationError, UnknownTeamError, UnknownWorkerError
from .model import Organization, Team, TeamId, WorkerId, WorkerMeta
from .repository import WorkerRepository


@dataclass(frozen=True)
class WorkerScope:
    worker: WorkerMeta
    team: Team
    organization: Organization

    @property
    def tz(self) -> str:
        return self.organization.timezone


@dataclass(frozen=True)
class TeamScope:
    team: Team
    organization: Organization
    members: List[WorkerMeta]

    @property
    def tz(self) -> str:
        return self.organization.timezone

    @property
    def member_ids(self) -> List[WorkerId]:
        return [m.worker_id for m in self.members]


class WorkerDirectory:
    """Resolves the metadata every calculation starts from; missing entities are errors."""

    def __init__(self, workers: WorkerRepository):
        self._workers = workers

    def _team(self, team_id: TeamId) -> Team:
        team = self._workers.fetch_team(team_id)
        if not team:
            raise UnknownTeamError(team_id)
        return team

    def _organization(self, team: Team) -> Organization:
        org = self._workers.fetch_organization(team.organization_id)
        if not org:
            raise UnknownOrganizationError(team.organization_id)
        return org

    def worker_scope(self, worker_id: WorkerId) -> WorkerScope:
        worker = self._workers.fetch_worker_meta(worker_id)
        if not worker:
            raise UnknownWorkerError(worker_id)
        team = self._team(worker.team_id)
        return WorkerScope(worker=worker, team=team, organization=self._organization(team))

    def team_scope(self, team_id: TeamId) -> TeamScope:
        team = self._team(team_id)
        org = self._organization(team)
        members = list(self._workers.fetch_team_members(team_id))
        return TeamScope(team=team, organization=org, members=members)
