"""
Command Line Interface Package

Command Structure:
- finboard: Main entry point with utility commands (version, config, init)
- finboard summary / charts: Dashboard summary and chart rendering
- finboard goals: Savings goal management
- finboard report: Monthly PDF report
"""
