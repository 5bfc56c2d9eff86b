"""组织管理模块 - 记录工厂测试"""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from yorg.organization import Gender, OrgType, PersonnelStatus
from yorg.organization.factory import (
    build_organization,
    build_personnel,
    organization_data_from_row,
    personnel_data_from_row,
    to_field_data,
)
from yorg.organization.schemas import Organization

NOW = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)


class TestBuildOrganization:
    """组织构造测试"""

    def test_blank_values_use_defaults(self):
        """测试空白值使用缺省值"""
        org = build_organization(
            {"name": "技术部", "type": "", "status": None, "establishedDate": " "},
            record_id="9",
            operator_name="系统管理员",
            now=NOW,
        )
        assert org.id == "9"
        assert org.type == OrgType.DEPARTMENT
        assert org.established_date == date(2025, 6, 1)
        assert org.parent_id is None

    def test_id_and_audit_overwritten(self):
        """测试ID与审计字段由工厂分配"""
        org = build_organization(
            {"id": "x", "name": "A", "createdBy": "someone"},
            record_id="9",
            operator_name="系统管理员",
            now=NOW,
        )
        assert org.id == "9"
        assert org.created_by == "系统管理员"
        assert org.created_at == NOW

    def test_missing_name_rejected(self):
        """测试缺少名称抛出校验错误"""
        with pytest.raises(ValidationError):
            build_organization({}, record_id="9", operator_name="系统管理员", now=NOW)


class TestBuildPersonnel:
    """人员构造测试"""

    def test_defaults(self):
        """测试人员缺省值"""
        person = build_personnel(
            {"name": "张三"},
            record_id="p1",
            operator_name="系统管理员",
            now=NOW,
            fallback_organization_id="1",
        )
        assert person.organization_id == "1"
        assert person.status == PersonnelStatus.ACTIVE
        assert person.gender == Gender.MALE
        assert person.salary == 0
        assert person.join_date == date(2025, 6, 1)

    def test_explicit_organization_wins(self):
        """测试显式组织优先于默认组织"""
        person = build_personnel(
            {"name": "张三", "organizationId": "5"},
            record_id="p1",
            operator_name="系统管理员",
            now=NOW,
            fallback_organization_id="1",
        )
        assert person.organization_id == "5"


class TestRowConversion:
    """原始行转换测试"""

    def test_organization_row(self):
        """测试组织行只保留模板列并转换数字"""
        data = organization_data_from_row({
            "name": "A",
            "parentId": 1.0,
            "employeeCount": "12人",
            "unknown": "ignored",
        })
        assert data == {"name": "A", "parentId": "1", "employeeCount": 12}

    def test_personnel_row(self):
        """测试人员行转换"""
        data = personnel_data_from_row({"name": "B", "salary": 15000.9, "age": None, "phone": 138})
        assert data == {"name": "B", "salary": 15000, "age": 0, "phone": "138"}

    def test_to_field_data(self):
        """测试别名统一为字段名"""
        data = to_field_data(Organization, {"parentId": "1", "employee_count": 3, "foo": 1})
        assert data == {"parent_id": "1", "employee_count": 3}
