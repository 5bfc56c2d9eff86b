__version__ = "0.1.0"
__author__ = "yorg"
__description__ = "组织与人员管理核心库"
