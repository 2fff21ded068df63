from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .anomalies.detector import AnomalyDetector
from .anomalies.service import AnomalyService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.reconstructor import AttendanceReconstructor
from .attendance.service import AttendanceService
from .checkins.mysql_checkin_repository import MySQLCheckinRepository
from .config import EngineSettings
from .database.connection import DBConfig, DatabaseConnection
from .engine import ComplianceEngine
from .exclusions.mysql_exclusion_repository import MySQLExclusionRepository
from .scoring.calculator.standard_calculator import StandardScoreCalculator
from .scoring.service import PerformanceService
from .scoring.team_service import TeamGradeService
from .streaks.service import StreakService
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.service import WorkerDirectory


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    workers_repo: MySQLWorkerRepository
    checkins_repo: MySQLCheckinRepository
    exclusions_repo: MySQLExclusionRepository
    attendance_repo: MySQLAttendanceRepository

    directory: WorkerDirectory
    attendance_service: AttendanceService
    performance_service: PerformanceService
    team_grade_service: TeamGradeService
    streak_service: StreakService
    anomaly_service: AnomalyService

    engine: ComplianceEngine


def build_container(*, db_config: dict, settings: Optional[EngineSettings] = None) -> Container:
    settings = settings or EngineSettings(db_config=db_config)
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    workers_repo = MySQLWorkerRepository(conn)
    checkins_repo = MySQLCheckinRepository(conn)
    exclusions_repo = MySQLExclusionRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    directory = WorkerDirectory(workers_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        checkins_repo,
        exclusions_repo,
        reconstructor=AttendanceReconstructor(calculator=StandardScoreCalculator(settings.partial_credit_score)),
    )
    performance_service = PerformanceService(directory, attendance_service)
    team_grade_service = TeamGradeService(
        directory,
        attendance_service,
        readiness_weight=settings.team_readiness_weight,
        min_checkin_days=settings.min_checkin_days_threshold,
    )
    streak_service = StreakService(directory, exclusions_repo, checkins_repo, history_days=settings.max_range_days)
    anomaly_service = AnomalyService(
        directory,
        checkins_repo,
        detector=AnomalyDetector(
            min_drop=settings.anomaly_min_drop,
            min_baseline=settings.anomaly_min_baseline,
            baseline_days=settings.anomaly_baseline_days,
        ),
    )

    engine = ComplianceEngine(
        performance=performance_service,
        team_grades=team_grade_service,
        streaks=streak_service,
        anomalies=anomaly_service,
        max_range_days=settings.max_range_days,
    )

    return Container(
        conn=conn,
        workers_repo=workers_repo,
        checkins_repo=checkins_repo,
        exclusions_repo=exclusions_repo,
        attendance_repo=attendance_repo,
        directory=directory,
        attendance_service=attendance_service,
        performance_service=performance_service,
        team_grade_service=team_grade_service,
        streak_service=streak_service,
        anomaly_service=anomaly_service,
        engine=engine,
    )
