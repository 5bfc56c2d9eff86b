"""组织管理模块 - 搜索测试"""

import pytest

from yorg.organization import EntityType, PersonnelStatus, SearchIndex, filter_personnel
from yorg.organization.search import search_records


class TestSearchRecords:
    """全文搜索测试"""

    def test_exact_name(self, staffed_store):
        """测试按姓名精确命中"""
        results = search_records(staffed_store.snapshot(), "张三")

        assert len(results) == 1
        result = results[0]
        assert result.type == EntityType.PERSONNEL
        assert result.name == "张三"
        assert "姓名" in result.matched_fields
        assert result.details.email == "zhangsan@company.com"

    def test_case_insensitive(self, staffed_store):
        """测试不区分大小写"""
        results = search_records(staffed_store.snapshot(), "WANGWU@")
        assert [r.name for r in results] == ["王五"]
        assert results[0].matched_fields == ["邮箱"]

    def test_organizations_before_personnel(self, staffed_store):
        """测试组织结果在人员结果之前"""
        results = search_records(staffed_store.snapshot(), "技术")
        types = [r.type for r in results]

        assert types[0] == EntityType.ORGANIZATION
        assert results[0].name == "技术部"
        # 张三、李四的部门字段命中
        assert [r.name for r in results[1:]] == ["张三", "李四"]
        assert all(r.matched_fields == ["部门"] for r in results[1:])

    def test_multiple_fields(self, staffed_store):
        """测试多个字段同时命中"""
        results = search_records(staffed_store.snapshot(), "工程师")
        assert {r.name for r in results} == {"张三", "王五"}

    def test_phone(self, staffed_store):
        """测试按电话命中"""
        results = search_records(staffed_store.snapshot(), "138001")
        assert [r.name for r in results] == ["张三"]
        assert results[0].matched_fields == ["电话"]

    def test_blank_term(self, staffed_store):
        """测试空关键词返回空列表"""
        assert search_records(staffed_store.snapshot(), "") == []
        assert search_records(staffed_store.snapshot(), "   ") == []

    def test_no_match(self, staffed_store):
        """测试无命中"""
        assert search_records(staffed_store.snapshot(), "不存在的关键词") == []


class TestSearchIndex:
    """实时搜索状态测试"""

    def test_empty_term_hides_results(self, staffed_store):
        """测试空关键词隐藏结果面板"""
        index = SearchIndex(staffed_store.snapshot)
        index.set_term("张三")
        assert index.visible is True

        assert index.set_term("") == []
        assert index.visible is False
        assert index.results == []

    def test_no_hits_still_visible(self, staffed_store):
        """测试已搜索但无命中时面板可见"""
        index = SearchIndex(staffed_store.snapshot)
        assert index.set_term("不存在") == []
        assert index.visible is True

    def test_refresh_on_store_change(self, staffed_store, org_tree):
        """测试数据变化后自动刷新结果"""
        index = SearchIndex(staffed_store.snapshot)
        staffed_store.add_listener(index.refresh)
        index.set_term("赵六")
        assert index.results == []

        staffed_store.create_personnel({"name": "赵六", "organizationId": org_tree[2].id})

        assert [r.name for r in index.results] == ["赵六"]

    def test_close_keeps_term(self, staffed_store):
        """测试关闭面板保留关键词"""
        index = SearchIndex(staffed_store.snapshot)
        index.set_term("张三")
        index.close()

        assert index.visible is False
        assert index.term == "张三"

    def test_clear(self, staffed_store):
        """测试清空关键词"""
        index = SearchIndex(staffed_store.snapshot)
        index.set_term("张三")
        index.clear()
        assert index.term == ""
        assert index.visible is False


class TestFilterPersonnel:
    """人员列表筛选测试"""

    def test_no_filters_returns_all(self, staffed_store):
        """测试无筛选条件时返回全部人员"""
        people = filter_personnel(staffed_store.list_personnel())
        assert [p.name for p in people] == ["张三", "李四", "王五"]

    def test_term_over_fixed_fields(self, staffed_store):
        """测试关键词匹配姓名、职位、邮箱、部门"""
        people = staffed_store.list_personnel()
        assert [p.name for p in filter_personnel(people, "经理")] == ["李四"]
        assert [p.name for p in filter_personnel(people, "LISI@")] == ["李四"]
        assert [p.name for p in filter_personnel(people, "前端组")] == ["王五"]
        # 电话不在筛选字段中
        assert filter_personnel(people, "13800138001") == []

    def test_organization_filter(self, staffed_store, org_tree):
        """测试按组织筛选"""
        _, tech, _, frontend = org_tree
        people = staffed_store.list_personnel()
        assert [p.name for p in filter_personnel(people, organization_id=tech.id)] == ["张三", "李四"]
        assert [p.name for p in filter_personnel(people, organization_id=frontend.id)] == ["王五"]
        assert len(filter_personnel(people, organization_id=None)) == 3

    def test_status_filter(self, staffed_store):
        """测试按状态筛选，支持枚举和字符串"""
        people = staffed_store.list_personnel()
        assert [p.name for p in filter_personnel(people, status="on-leave")] == ["王五"]
        assert [p.name for p in filter_personnel(people, status=PersonnelStatus.ACTIVE)] == ["张三", "李四"]
        assert filter_personnel(people, status=PersonnelStatus.INACTIVE) == []

    def test_conditions_combined(self, staffed_store, org_tree):
        """测试三个条件同时满足"""
        _, tech, _, _ = org_tree
        people = staffed_store.list_personnel()
        assert [p.name for p in filter_personnel(people, "工程师", tech.id, "active")] == ["张三"]
        assert filter_personnel(people, "工程师", tech.id, "on-leave") == []

    def test_unknown_status_rejected(self, staffed_store):
        """测试未知状态值"""
        with pytest.raises(ValueError):
            filter_personnel(staffed_store.list_personnel(), status="retired")
