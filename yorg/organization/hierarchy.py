"""组织树工具函数

把扁平的组织集合构建为森林，并提供过滤、展平、查找、路径与环检测。

使用示例:
    from yorg.organization.hierarchy import build_tree, filter_tree, flatten_tree

    forest = build_tree(snapshot.organizations, snapshot.personnel)
    matched = filter_tree(forest, "技术")
    rows = flatten_tree(matched)  # [(depth, node), ...]
"""

from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from .schemas import Organization, OrgNode, Personnel


def build_tree(
    organizations: Iterable[Organization],
    personnel: Iterable[Personnel] = (),
) -> List[OrgNode]:
    """将扁平组织列表构建为森林

    - parent_id 为空或指向不存在的组织时，该组织成为根节点
    - 同级节点保持输入顺序
    - 每个节点附带直属人员（计算得出，不写回记录）

    节点通过映射表连接，不做递归，因此即使输入中存在环也能结束；
    环上的节点不会出现在任何根下。

    使用示例:
        orgs = [org(id="1"), org(id="2", parent_id="1"), org(id="3", parent_id="1")]
        forest = build_tree(orgs)
        # [OrgNode(1, children=[OrgNode(2), OrgNode(3)])]
    """
    personnel_by_org: Dict[str, List[Personnel]] = {}
    for person in personnel:
        personnel_by_org.setdefault(person.organization_id, []).append(person)

    node_map: Dict[str, OrgNode] = {}
    for org in organizations:
        node_map[org.id] = OrgNode(
            organization=org,
            personnel=list(personnel_by_org.get(org.id, [])),
        )

    roots: List[OrgNode] = []
    for node in node_map.values():
        parent_id = node.organization.parent_id
        if parent_id and parent_id in node_map and parent_id != node.id:
            node_map[parent_id].children.append(node)
        else:
            roots.append(node)

    return roots


def _contains(value: Optional[str], term: str) -> bool:
    return bool(value) and term in value.lower()


def organization_matches(org: Organization, term: str) -> bool:
    """组织名称、描述、负责人是否包含关键词（term 需已小写）"""
    return (
        _contains(org.name, term)
        or _contains(org.description, term)
        or _contains(org.manager, term)
    )


def personnel_matches(person: Personnel, term: str) -> bool:
    """人员姓名、职位、邮箱是否包含关键词（term 需已小写）"""
    return (
        _contains(person.name, term)
        or _contains(person.position, term)
        or _contains(person.email, term)
    )


def filter_tree(forest: List[OrgNode], term: str) -> List[OrgNode]:
    """按关键词过滤组织树

    保留满足以下任一条件的节点：自身匹配、直属人员匹配、存在匹配的后代。
    匹配后代的祖先链会被保留，结构不变；返回新节点，不修改输入。
    关键词为空时原样返回。
    """
    if not term:
        return forest
    needle = term.lower()

    def node_matches(node: OrgNode) -> bool:
        return organization_matches(node.organization, needle) or any(
            personnel_matches(p, needle) for p in node.personnel
        )

    return prune_tree(forest, node_matches)


def prune_tree(
    forest: List[OrgNode],
    predicate: Callable[[OrgNode], bool],
    keep_ancestors: bool = True,
) -> List[OrgNode]:
    """通用树过滤

    Args:
        forest: 组织森林
        predicate: 过滤条件，返回 True 表示保留该节点
        keep_ancestors: 是否保留匹配节点的祖先（即使祖先本身不匹配）
    """
    result: List[OrgNode] = []
    for node in forest:
        kept_children = prune_tree(node.children, predicate, keep_ancestors) if node.children else []
        if predicate(node) or (keep_ancestors and kept_children):
            result.append(node.copy_shallow(children=kept_children))
    return result


def flatten_tree(forest: List[OrgNode], _depth: int = 1) -> List[Tuple[int, OrgNode]]:
    """先序展平，返回 (层级, 节点) 列表，根节点层级为 1"""
    result: List[Tuple[int, OrgNode]] = []
    for node in forest:
        result.append((_depth, node))
        if node.children:
            result.extend(flatten_tree(node.children, _depth + 1))
    return result


def find_node(forest: List[OrgNode], org_id: str) -> Optional[OrgNode]:
    """在树中查找指定组织"""
    for node in forest:
        if node.id == org_id:
            return node
        found = find_node(node.children, org_id)
        if found:
            return found
    return None


def get_node_path(forest: List[OrgNode], org_id: str) -> List[OrgNode]:
    """从根到目标组织的路径，未找到返回空列表"""
    for node in forest:
        if node.id == org_id:
            return [node]
        path = get_node_path(node.children, org_id)
        if path:
            return [node] + path
    return []


def tree_depth(forest: List[OrgNode]) -> int:
    """树的最大深度，空森林为 0"""
    if not forest:
        return 0
    return 1 + max(tree_depth(node.children) for node in forest)


def get_ancestor_ids(organizations: Iterable[Organization], org_id: str) -> List[str]:
    """沿 parent_id 向上收集祖先ID（近 -> 远），遇到环或悬空引用即停止"""
    parent_of = {org.id: org.parent_id for org in organizations}
    ancestors: List[str] = []
    seen: Set[str] = {org_id}
    current = parent_of.get(org_id)
    while current and current in parent_of and current not in seen:
        ancestors.append(current)
        seen.add(current)
        current = parent_of.get(current)
    return ancestors


def get_descendant_ids(organizations: Iterable[Organization], org_id: str) -> List[str]:
    """收集所有后代组织ID（广度优先）"""
    children_of: Dict[str, List[str]] = {}
    for org in organizations:
        if org.parent_id:
            children_of.setdefault(org.parent_id, []).append(org.id)
    result: List[str] = []
    seen: Set[str] = {org_id}
    queue = list(children_of.get(org_id, []))
    while queue:
        current = queue.pop(0)
        if current in seen:
            continue
        seen.add(current)
        result.append(current)
        queue.extend(children_of.get(current, []))
    return result


def would_create_cycle(
    organizations: Iterable[Organization],
    org_id: str,
    new_parent_id: Optional[str],
) -> bool:
    """把 org_id 的上级设为 new_parent_id 是否会形成环

    新上级是自身，或者自身出现在新上级的祖先链中，即会形成环。
    """
    if not new_parent_id:
        return False
    if new_parent_id == org_id:
        return True
    return org_id in get_ancestor_ids(organizations, new_parent_id)


__all__ = [
    "build_tree",
    "filter_tree",
    "prune_tree",
    "organization_matches",
    "personnel_matches",
    "flatten_tree",
    "find_node",
    "get_node_path",
    "tree_depth",
    "get_ancestor_ids",
    "get_descendant_ids",
    "would_create_cycle",
]
