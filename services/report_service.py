"""
services/report_service.py

성적 테이블을 읽기 전용으로 집계하는 화면용 서비스.
- 성적 입력표 (학급 명단 + 과목/기간별 성적)
- 학생 성적표 (과목별 1~4기간 점수, 평균, 통과 여부)
- 관리자 대시보드 요약
"""

from sqlalchemy.orm import Session

from models.classes import Class as ClassModel
from models.enrollments import Enrollment as EnrollmentModel
from models.grades import Grade as GradeModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from models.teachers import Teacher as TeacherModel
from schemas.grades import GradeSheet, GradeSheetRow, PersistedGrade
from schemas.reports import DashboardSummary, RecentGrade, ReportCard, ReportCardRow
from services.crud import get_or_404
from services.grade_manager import round_half_up
from services.school_settings_service import get_settings


# ==========================================================
# [1] 성적 입력표
# ==========================================================
def build_grade_sheet(db: Session, class_id: int, subject_id: int, term: int) -> GradeSheet:
    get_or_404(db, ClassModel, class_id, "학급")
    get_or_404(db, SubjectModel, subject_id, "과목")

    students = (
        db.query(StudentModel)
        .join(EnrollmentModel, EnrollmentModel.student_id == StudentModel.id)
        .filter(EnrollmentModel.class_id == class_id)
        .order_by(StudentModel.name)
        .all()
    )
    grades = (
        db.query(GradeModel)
        .filter(
            GradeModel.class_id == class_id,
            GradeModel.subject_id == subject_id,
            GradeModel.term == term,
        )
        .all()
    )
    by_student = {g.student_id: g for g in grades}

    rows = []
    for s in students:
        grade = by_student.get(s.id)
        rows.append(GradeSheetRow(
            student_id=s.id,
            student_name=s.name,
            grade=PersistedGrade.model_validate(grade) if grade is not None else None,
        ))
    return GradeSheet(class_id=class_id, subject_id=subject_id, term=term, rows=rows)


# ==========================================================
# [2] 학생 성적표
# ==========================================================
def build_report_card(db: Session, class_id: int, student_id: int) -> ReportCard:
    school_class = get_or_404(db, ClassModel, class_id, "학급")
    student = get_or_404(db, StudentModel, student_id, "학생")
    passing_grade = get_settings(db).passing_grade

    results = (
        db.query(GradeModel, SubjectModel)
        .join(SubjectModel, SubjectModel.id == GradeModel.subject_id)
        .filter(GradeModel.student_id == student_id, GradeModel.class_id == class_id)
        .order_by(SubjectModel.name, GradeModel.term)
        .all()
    )

    grouped = {}
    for grade, subject in results:
        entry = grouped.setdefault(subject.id, {"subject_name": subject.name, "terms": {}})
        entry["terms"][grade.term] = grade.value

    rows = []
    for subject_id, entry in grouped.items():
        terms = entry["terms"]
        average = round_half_up(sum(terms.values()) / len(terms)) if terms else 0.0
        rows.append(ReportCardRow(
            subject_id=subject_id,
            subject_name=entry["subject_name"],
            term1=terms.get(1),
            term2=terms.get(2),
            term3=terms.get(3),
            term4=terms.get(4),
            average=average,
            status="APPROVED" if average >= passing_grade else "FAILED",
        ))
    rows.sort(key=lambda r: r.subject_name)

    return ReportCard(
        student_id=student.id,
        student_name=student.name,
        class_id=school_class.id,
        class_name=school_class.name,
        passing_grade=passing_grade,
        rows=rows,
    )


# ==========================================================
# [3] 관리자 대시보드
# ==========================================================
def dashboard_summary(db: Session, recent_limit: int = 5) -> DashboardSummary:
    recent = (
        db.query(GradeModel, StudentModel.name, SubjectModel.name, ClassModel.name)
        .join(StudentModel, StudentModel.id == GradeModel.student_id)
        .join(SubjectModel, SubjectModel.id == GradeModel.subject_id)
        .join(ClassModel, ClassModel.id == GradeModel.class_id)
        .order_by(GradeModel.created_at.desc(), GradeModel.id.desc())
        .limit(recent_limit)
        .all()
    )
    return DashboardSummary(
        total_students=db.query(StudentModel).count(),
        total_teachers=db.query(TeacherModel).count(),
        total_classes=db.query(ClassModel).count(),
        total_subjects=db.query(SubjectModel).count(),
        recent_grades=[
            RecentGrade(
                id=g.id,
                student_name=student_name,
                subject_name=subject_name,
                class_name=class_name,
                term=g.term,
                value=g.value,
            )
            for g, student_name, subject_name, class_name in recent
        ],
    )
