"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the column names of the
hosted tables (members, codes, donations) stay out of the domain.
"""

from decimal import Decimal

from offerbook.domain import entities as domain
from offerbook.database.models import (
    Budget as ORMBudget,
    Code as ORMCode,
    Donation as ORMDonation,
    Member as ORMMember,
)


def donor_to_domain(orm_member: ORMMember) -> domain.Donor:
    """Convert SQLAlchemy Member model to domain Donor entity."""
    return domain.Donor(
        id=orm_member.id,
        name=orm_member.name,
        offering_number=orm_member.member_no or None,
        note=orm_member.note,
        phone=orm_member.phone,
        email=orm_member.email,
        address=orm_member.address,
        is_active=orm_member.is_active,
    )


def offering_type_to_domain(orm_code: ORMCode) -> domain.OfferingType:
    """Convert SQLAlchemy Code model to domain OfferingType entity."""
    return domain.OfferingType(
        code=orm_code.code,
        label=orm_code.name,
        category=orm_code.category,
        description=orm_code.description,
        is_active=orm_code.is_active,
    )


def record_to_domain(orm_donation: ORMDonation) -> domain.OfferingRecord:
    """Convert SQLAlchemy Donation model to domain OfferingRecord entity."""
    return domain.OfferingRecord(
        id=orm_donation.id,
        date=orm_donation.donate_at,
        donor_id=orm_donation.member_id,
        donor_name=orm_donation.member_name or domain.ANONYMOUS_DONOR,
        offering_number=orm_donation.member_no or None,
        code=orm_donation.donation_code,
        label=orm_donation.code_name or orm_donation.donation_code,
        amount=Decimal(orm_donation.amount),
        note=orm_donation.note or "",
    )


def record_to_orm(record: domain.NewOfferingRecord) -> ORMDonation:
    """Build a SQLAlchemy Donation row from a new domain record."""
    return ORMDonation(
        donate_at=record.date,
        member_id=record.donor_id,
        member_no=record.offering_number or None,
        member_name=record.donor_name,
        donation_code=record.code,
        code_name=record.label,
        amount=record.amount,
        note=record.note or "",
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.BudgetRecord:
    """Convert SQLAlchemy Budget model to domain BudgetRecord entity."""
    return domain.BudgetRecord(
        year=orm_budget.year,
        code=orm_budget.code,
        amount=Decimal(orm_budget.amount),
        note=orm_budget.note,
    )
