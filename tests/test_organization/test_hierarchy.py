"""组织管理模块 - 组织树测试"""

from datetime import date, datetime, timezone

from yorg.organization import Organization, Personnel
from yorg.organization.hierarchy import (
    build_tree,
    filter_tree,
    find_node,
    flatten_tree,
    get_ancestor_ids,
    get_descendant_ids,
    get_node_path,
    prune_tree,
    tree_depth,
    would_create_cycle,
)

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


def org(org_id, name=None, parent_id=None, **kwargs):
    return Organization(
        id=org_id,
        name=name or f"组织{org_id}",
        parent_id=parent_id,
        established_date=date(2025, 6, 1),
        created_by="系统管理员",
        created_at=NOW,
        **kwargs,
    )


def person(person_id, name, org_id, **kwargs):
    return Personnel(
        id=person_id,
        name=name,
        organization_id=org_id,
        join_date=date(2025, 6, 1),
        created_by="系统管理员",
        created_at=NOW,
        **kwargs,
    )


class TestBuildTree:
    """构建组织树测试"""

    def test_one_root_two_children_in_order(self):
        """测试一个根两个子节点，保持输入顺序"""
        forest = build_tree([org("1"), org("2", parent_id="1"), org("3", parent_id="1")])

        assert len(forest) == 1
        assert forest[0].id == "1"
        assert [child.id for child in forest[0].children] == ["2", "3"]

    def test_child_before_parent(self):
        """测试子节点出现在父节点之前"""
        forest = build_tree([org("2", parent_id="1"), org("1")])
        assert [node.id for node in forest] == ["1"]
        assert forest[0].children[0].id == "2"

    def test_dangling_parent_becomes_root(self):
        """测试上级不存在时成为根节点"""
        forest = build_tree([org("1"), org("2", parent_id="404")])
        assert [node.id for node in forest] == ["1", "2"]

    def test_self_parent_becomes_root(self):
        """测试上级是自身时成为根节点"""
        forest = build_tree([org("1", parent_id="1")])
        assert [node.id for node in forest] == ["1"]
        assert forest[0].children == []

    def test_cycle_terminates(self):
        """测试输入中存在环时仍能结束"""
        forest = build_tree([org("1", parent_id="2"), org("2", parent_id="1"), org("3")])
        assert [node.id for node in forest] == ["3"]

    def test_personnel_attached(self):
        """测试节点附带直属人员"""
        forest = build_tree(
            [org("1"), org("2", parent_id="1")],
            [person("p1", "张三", "2"), person("p2", "李四", "404")],
        )
        assert forest[0].personnel == []
        assert [p.name for p in forest[0].children[0].personnel] == ["张三"]

    def test_empty(self):
        """测试空集合"""
        assert build_tree([]) == []


class TestFilterTree:
    """过滤组织树测试"""

    def setup_method(self):
        self.forest = build_tree(
            [
                org("1", "示例公司"),
                org("2", "技术部", parent_id="1", manager="李部长"),
                org("3", "产品部", parent_id="1"),
                org("4", "前端组", parent_id="2"),
            ],
            [person("p1", "张三", "4", email="zhangsan@company.com")],
        )

    def test_empty_term_returns_forest(self):
        """测试空关键词原样返回"""
        assert filter_tree(self.forest, "") is self.forest

    def test_keeps_ancestors_of_match(self):
        """测试保留匹配节点的祖先链"""
        result = filter_tree(self.forest, "前端")

        assert [node.id for node in result] == ["1"]
        assert [node.id for node in result[0].children] == ["2"]
        assert [node.id for node in result[0].children[0].children] == ["4"]

    def test_matches_attached_personnel(self):
        """测试按直属人员匹配"""
        result = filter_tree(self.forest, "ZHANGSAN")
        assert [node.id for _, node in flatten_tree(result)] == ["1", "2", "4"]

    def test_matches_manager(self):
        """测试按负责人匹配"""
        result = filter_tree(self.forest, "李部长")
        assert [node.id for _, node in flatten_tree(result)] == ["1", "2"]

    def test_no_match(self):
        """测试无匹配返回空森林"""
        assert filter_tree(self.forest, "不存在") == []

    def test_input_not_modified(self):
        """测试过滤不修改输入"""
        filter_tree(self.forest, "前端")
        assert [child.id for child in self.forest[0].children] == ["2", "3"]

    def test_prune_without_ancestors(self):
        """测试不保留祖先的通用过滤"""
        result = prune_tree(self.forest, lambda node: node.id == "4", keep_ancestors=False)
        assert result == []


class TestTreeHelpers:
    """树工具函数测试"""

    def setup_method(self):
        self.orgs = [
            org("1"),
            org("2", parent_id="1"),
            org("3", parent_id="1"),
            org("4", parent_id="2"),
        ]
        self.forest = build_tree(self.orgs)

    def test_flatten_with_depth(self):
        """测试先序展平"""
        rows = [(depth, node.id) for depth, node in flatten_tree(self.forest)]
        assert rows == [(1, "1"), (2, "2"), (3, "4"), (2, "3")]

    def test_find_node(self):
        """测试查找节点"""
        assert find_node(self.forest, "4").id == "4"
        assert find_node(self.forest, "404") is None

    def test_node_path(self):
        """测试根到节点的路径"""
        assert [node.id for node in get_node_path(self.forest, "4")] == ["1", "2", "4"]
        assert get_node_path(self.forest, "404") == []

    def test_depth(self):
        """测试树深度"""
        assert tree_depth(self.forest) == 3
        assert tree_depth([]) == 0

    def test_ancestors_and_descendants(self):
        """测试祖先与后代"""
        assert get_ancestor_ids(self.orgs, "4") == ["2", "1"]
        assert get_descendant_ids(self.orgs, "1") == ["2", "3", "4"]

    def test_would_create_cycle(self):
        """测试环检测"""
        assert would_create_cycle(self.orgs, "1", "4") is True
        assert would_create_cycle(self.orgs, "2", "2") is True
        assert would_create_cycle(self.orgs, "3", "2") is False
        assert would_create_cycle(self.orgs, "2", None) is False
