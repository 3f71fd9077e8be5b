"""Demo fixtures — a realistic compliance workspace as of early March 2025.

Dates line up with ``DEMO_REFERENCE_NOW``; pin ``REFERENCE_NOW`` to that
instant to see the intended mix of overdue, expiring and healthy records.
"""

from __future__ import annotations

from backend.models.compliance import ComplianceFramework
from backend.models.deadline import DeadlineItem
from backend.models.incident import IncidentRecord
from backend.models.lifecycle import LifecycleKind, LifecycleRecord
from backend.models.risk import CategoryScore, RiskItem
from backend.models.snapshot import RecordSnapshot
from backend.utils.time import parse_instant

DEMO_REFERENCE_NOW = "2025-03-05T09:00:00Z"

# ─── Risk register ──────────────────────────────────────────────

_RISK_ITEMS = [
    {"id": "RISK-001", "title": "Customer PII exposed through misconfigured storage", "category": "Data Privacy", "impact": 5, "likelihood": 4, "owner": "Security Team"},
    {"id": "RISK-002", "title": "Cross-border transfers without SCCs", "category": "Data Privacy", "impact": 4, "likelihood": 3, "owner": "Legal Team"},
    {"id": "RISK-003", "title": "Unpatched cloud infrastructure", "category": "Cybersecurity", "impact": 5, "likelihood": 5, "owner": "IT Operations"},
    {"id": "RISK-004", "title": "Phishing-driven credential compromise", "category": "Cybersecurity", "impact": 4, "likelihood": 4, "owner": "Security Team"},
    {"id": "RISK-005", "title": "Critical vendor without current SOC 2 report", "category": "Third-Party", "impact": 4, "likelihood": 3, "owner": "Procurement"},
    {"id": "RISK-006", "title": "Vendor offboarding leaves active accounts", "category": "Third-Party", "impact": 3, "likelihood": 2, "owner": "IT Operations"},
    {"id": "RISK-007", "title": "Churn model lacks bias testing evidence", "category": "AI Governance", "impact": 3, "likelihood": 3, "owner": "AI Ethics Board"},
    {"id": "RISK-008", "title": "Model inventory out of date", "category": "AI Governance", "impact": 2, "likelihood": 3, "owner": "Data Science"},
    {"id": "RISK-009", "title": "Missed regulatory filing deadline", "category": "Regulatory", "impact": 4, "likelihood": 2, "owner": "Compliance Team"},
    {"id": "RISK-010", "title": "Policy attestations below target", "category": "Regulatory", "impact": 2, "likelihood": 2, "owner": "HR"},
    {"id": "RISK-011", "title": "Single-region hosting for core services", "category": "Operational", "impact": 4, "likelihood": 2, "owner": "Platform Team"},
    {"id": "RISK-012", "title": "Manual quarter-end reconciliation", "category": "Operational", "impact": 1, "likelihood": 2, "owner": "Finance"},
]

_RISK_CATEGORIES = [
    {"name": "Data Privacy", "score": 78},
    {"name": "Cybersecurity", "score": 86},
    {"name": "Third-Party", "score": 64},
    {"name": "AI Governance", "score": 52},
    {"name": "Regulatory", "score": 41},
    {"name": "Operational", "score": 27},
]

# ─── Incidents ──────────────────────────────────────────────────

_INCIDENTS = [
    {"id": "INC-2025-0034", "title": "Unauthorized Access to Customer Database", "category": "Security", "severity": "Critical", "status": "In Progress", "created_at": "2025-03-04T16:32:14Z", "sla_deadline": "2025-03-06T16:32:14Z", "assigned_to": "Taylor Wong"},
    {"id": "INC-2025-0033", "title": "GDPR Data Subject Request Delayed Response", "category": "Compliance", "severity": "High", "status": "Open", "created_at": "2025-03-03T10:15:22Z", "sla_deadline": "2025-03-06T06:15:22Z"},
    {"id": "INC-2025-0032", "title": "Vendor Security Assessment Failure", "category": "Compliance", "severity": "High", "status": "In Progress", "created_at": "2025-03-02T14:45:30Z", "sla_deadline": "2025-03-04T14:45:30Z", "assigned_to": "Procurement"},
    {"id": "INC-2025-0031", "title": "Potential PII Data Leak in Log Files", "category": "Data Breach", "severity": "Medium", "status": "Open", "created_at": "2025-03-01T09:22:17Z", "sla_deadline": "2025-03-11T09:22:17Z"},
    {"id": "INC-2025-0030", "title": "Security Certificate Expiration", "category": "Security", "severity": "Medium", "status": "Resolved", "created_at": "2025-02-28T18:10:45Z", "sla_deadline": "2025-03-01T18:10:45Z", "resolved_at": "2025-03-01T06:30:12Z"},
    {"id": "INC-2025-0029", "title": "AI Model Bias Detection", "category": "Compliance", "severity": "Medium", "status": "In Progress", "created_at": "2025-02-26T11:05:38Z", "sla_deadline": "2025-03-12T11:05:38Z", "assigned_to": "Blake Chen"},
    {"id": "INC-2025-0028", "title": "Brute Force Authentication Attempts", "category": "Security", "severity": "Low", "status": "Closed", "created_at": "2025-02-20T07:40:00Z", "resolved_at": "2025-02-21T13:10:00Z"},
    {"id": "INC-2025-0027", "title": "Suspicious Privilege Escalation Alert", "category": "Security", "severity": "High", "status": "Open", "created_at": "2025-03-05T07:10:00Z"},
]

# ─── Frameworks ─────────────────────────────────────────────────

_FRAMEWORKS = [
    {"id": "fw-gdpr", "name": "GDPR", "score": 87, "controls_compliant": 83, "total_controls": 95, "critical_findings": 0, "last_assessed_at": "2025-02-15T00:00:00Z"},
    {"id": "fw-iso27001", "name": "ISO 27001", "score": 92, "controls_compliant": 105, "total_controls": 114, "critical_findings": 0, "last_assessed_at": "2025-01-20T00:00:00Z"},
    {"id": "fw-soc2", "name": "SOC 2", "score": 85, "controls_compliant": 54, "total_controls": 64, "critical_findings": 1, "last_assessed_at": "2025-02-01T00:00:00Z"},
    {"id": "fw-hipaa", "name": "HIPAA", "score": 78, "controls_compliant": 35, "total_controls": 45, "critical_findings": 1, "last_assessed_at": "2025-01-05T00:00:00Z"},
    {"id": "fw-pci", "name": "PCI DSS", "score": 58, "controls_compliant": 150, "total_controls": 264, "critical_findings": 3, "last_assessed_at": "2024-12-10T00:00:00Z"},
    {"id": "fw-euaiact", "name": "EU AI Act", "score": None, "controls_compliant": 0, "total_controls": 38, "critical_findings": 0},
]

# ─── Vendors, documents, policies ───────────────────────────────

_VENDORS = [
    {"id": "vendor-001", "name": "CloudSecure Solutions", "category": "Cloud Infrastructure", "risk_level": "Low", "status": "Compliant", "score": 92, "next_review_date": "2025-08-10T00:00:00Z", "updated_at": "2025-02-10T09:30:00Z"},
    {"id": "vendor-002", "name": "DataAnalyze Pro", "category": "Analytics", "risk_level": "Medium", "status": "At Risk", "score": 78, "next_review_date": "2025-04-20T00:00:00Z", "updated_at": "2025-01-20T14:15:00Z"},
    {"id": "vendor-003", "name": "SecurePayments Inc", "category": "Payment Processing", "risk_level": "Low", "status": "Compliant", "score": 96, "next_review_date": "2025-08-28T00:00:00Z", "updated_at": "2025-02-28T11:00:00Z"},
    {"id": "vendor-004", "name": "TechRecruit Partners", "category": "HR Services", "risk_level": "High", "status": "Non-Compliant", "score": 54, "next_review_date": "2025-03-15T00:00:00Z", "updated_at": "2024-12-15T10:30:00Z"},
    {"id": "vendor-005", "name": "MarketBoost Media", "category": "Marketing", "risk_level": "Medium", "status": None, "score": 68, "next_review_date": "2025-06-01T00:00:00Z", "updated_at": "2025-01-08T16:00:00Z"},
    {"id": "vendor-006", "name": "DevOps Accelerators", "category": "Development", "risk_level": "Critical", "status": "Expired", "score": 61, "expiry_date": "2025-01-15T00:00:00Z", "updated_at": "2024-11-02T12:00:00Z"},
    {"id": "vendor-007", "name": "GlobalTranslate AI", "category": "Localization", "status": "Pending", "score": None, "next_review_date": "2025-05-10T00:00:00Z", "updated_at": "2025-03-01T08:00:00Z"},
]

_DOCUMENTS = [
    {"id": "doc-001", "name": "Information Security Policy", "category": "Security", "status": "Approved", "expiry_date": "2026-01-10T00:00:00Z", "updated_at": "2025-01-10T00:00:00Z"},
    {"id": "doc-002", "name": "Data Processing Agreement Template", "category": "Privacy", "status": "Approved", "expiry_date": "2025-11-05T00:00:00Z", "updated_at": "2024-11-05T00:00:00Z"},
    {"id": "doc-003", "name": "Incident Response Plan", "category": "Security", "status": "Review", "updated_at": "2025-03-02T00:00:00Z"},
    {"id": "doc-004", "name": "Business Continuity Plan", "category": "Operations", "status": "Approved", "expiry_date": "2025-12-15T00:00:00Z", "updated_at": "2024-12-15T00:00:00Z"},
    {"id": "doc-005", "name": "Vendor Management Procedure", "category": "Third-Party", "status": "Approved", "expiry_date": "2025-06-10T00:00:00Z", "updated_at": "2024-06-10T00:00:00Z"},
    {"id": "doc-006", "name": "Access Control Standard", "category": "Security", "status": "Approved", "expiry_date": "2025-02-20T00:00:00Z", "updated_at": "2024-02-20T00:00:00Z"},
    {"id": "doc-007", "name": "Records Retention Schedule", "category": "Privacy", "status": "Approved", "expiry_date": "2025-04-01T00:00:00Z", "updated_at": "2024-04-01T00:00:00Z"},
    {"id": "doc-008", "name": "AI Model Documentation Standard", "category": "AI Governance", "status": "Draft", "updated_at": "2025-03-04T00:00:00Z"},
]

_POLICIES = [
    {"id": "pol-001", "name": "Acceptable Use Policy", "category": "Security", "status": "Active", "next_review_date": "2025-09-01T00:00:00Z", "updated_at": "2024-09-01T00:00:00Z"},
    {"id": "pol-002", "name": "Privacy Notice", "category": "Privacy", "status": "Active", "next_review_date": "2025-03-20T00:00:00Z", "updated_at": "2024-03-20T00:00:00Z"},
    {"id": "pol-003", "name": "Remote Work Security Policy", "category": "Security", "status": "Active", "next_review_date": "2025-02-01T00:00:00Z", "updated_at": "2024-02-01T00:00:00Z"},
    {"id": "pol-004", "name": "AI Acceptable Use Policy", "category": "AI Governance", "status": "Draft", "next_review_date": "2025-07-15T00:00:00Z", "updated_at": "2025-02-27T00:00:00Z"},
    {"id": "pol-005", "name": "Anti-Bribery Policy", "category": "Ethics", "status": "Review", "next_review_date": "2025-05-30T00:00:00Z", "updated_at": "2025-02-14T00:00:00Z"},
]

# ─── Deadlines ──────────────────────────────────────────────────

_DEADLINES = [
    {"id": "dl-001", "title": "Q1 GDPR Records of Processing update", "due_date": "2025-03-31T23:59:59Z", "priority": "high", "category": "regulatory", "framework": "GDPR", "assignee": "Legal Team"},
    {"id": "dl-002", "title": "Apply missing security patches", "due_date": "2025-03-04T23:59:59Z", "priority": "critical", "category": "other", "framework": "ISO 27001", "assignee": "IT Operations"},
    {"id": "dl-003", "title": "SOC 2 Type II evidence collection", "due_date": "2025-04-15T00:00:00Z", "priority": "medium", "category": "audit", "framework": "SOC 2", "assignee": "Compliance Team"},
    {"id": "dl-004", "title": "Vendor risk reassessment: TechRecruit Partners", "due_date": "2025-03-07T17:00:00Z", "priority": "high", "category": "assessment", "assignee": "Procurement"},
    {"id": "dl-005", "title": "Quarterly board compliance report", "due_date": "2025-03-05T17:00:00Z", "priority": "medium", "category": "report", "assignee": "Compliance Team"},
    {"id": "dl-006", "title": "Revoke vendor's excessive access permissions", "due_date": "2025-03-05T23:59:59Z", "priority": "critical", "category": "other", "completed": True, "completed_at": "2025-03-04T12:00:00Z", "assignee": "Taylor Wong"},
    {"id": "dl-007", "title": "EU AI Act gap assessment", "due_date": "2025-05-30T00:00:00Z", "priority": "low", "category": "assessment", "framework": "EU AI Act", "assignee": "AI Ethics Board"},
]


def _lifecycle(kind: LifecycleKind, rows: list[dict]) -> tuple[LifecycleRecord, ...]:
    return tuple(LifecycleRecord(kind=kind, **row) for row in rows)


def demo_snapshot() -> RecordSnapshot:
    """Build the fixture snapshot from the literals above."""
    return RecordSnapshot(
        risk_items=tuple(RiskItem(**row) for row in _RISK_ITEMS),
        risk_categories=tuple(CategoryScore(**row) for row in _RISK_CATEGORIES),
        risk_overall_score=68,
        risk_previous_score=72,
        incidents=tuple(IncidentRecord(**row) for row in _INCIDENTS),
        frameworks=tuple(ComplianceFramework(**row) for row in _FRAMEWORKS),
        compliance_previous_score=79,
        vendors=_lifecycle(LifecycleKind.VENDOR, _VENDORS),
        documents=_lifecycle(LifecycleKind.DOCUMENT, _DOCUMENTS),
        policies=_lifecycle(LifecycleKind.POLICY, _POLICIES),
        deadlines=tuple(DeadlineItem(**row) for row in _DEADLINES),
        retrieved_at=parse_instant(DEMO_REFERENCE_NOW),
    )
