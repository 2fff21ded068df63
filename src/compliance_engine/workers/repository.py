from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Organization, OrganizationId, Team, TeamId, WorkerId, WorkerMeta


class WorkerRepository(Protocol):
    def fetch_worker_meta(self, worker_id: WorkerId) -> Optional[WorkerMeta]:
        raise NotImplementedError

    def fetch_team(self, team_id: TeamId) -> Optional[Team]:
        raise NotImplementedError

    def fetch_team_members(self, team_id: TeamId) -> Sequence[WorkerMeta]:
        """Active members of the team, in a stable order."""

        raise NotImplementedError

    def fetch_organization(self, organization_id: OrganizationId) -> Optional[Organization]:
        raise NotImplementedError
