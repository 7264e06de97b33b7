"""taskmirror Core -- 任务领域模型与配置常量"""
