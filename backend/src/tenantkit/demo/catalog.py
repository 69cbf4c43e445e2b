"""Demo content for the in-memory search backend.

Creation times are relative to when the catalogue is built, so the
recency boost applies the same way on every run.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from tenantkit.core.types import SearchableItem, utc_now

# id, type, category, title, description, content, url, image, tags, metadata, age in days
_CATALOG = [
    (
        "doc_001", "document", "Guides", "Getting Started Guide",
        "A comprehensive guide to help you get started with our platform",
        "Welcome to our platform. This guide will walk you through the initial setup process, "
        "account configuration, and basic features. Learn how to create your first project, "
        "invite team members, and configure your workspace settings.",
        "/docs/getting-started", "/images/docs/getting-started.png",
        ["guide", "tutorial", "beginner", "setup"],
        {"readTime": "10 min", "difficulty": "beginner"}, 5,
    ),
    (
        "doc_002", "document", "API", "API Documentation",
        "Complete API reference documentation for developers",
        "Our REST API provides programmatic access to all platform features. This documentation "
        "covers authentication, endpoints, request/response formats, rate limits, and error "
        "handling. Includes code examples in multiple languages.",
        "/docs/api", "/images/docs/api.png",
        ["api", "developer", "rest", "integration", "technical"],
        {"readTime": "30 min", "difficulty": "advanced"}, 30,
    ),
    (
        "doc_003", "document", "Security", "User Management Best Practices",
        "Learn how to effectively manage users and permissions",
        "Proper user management is crucial for security and productivity. This guide covers "
        "role-based access control, permission hierarchies, user onboarding workflows, and audit "
        "logging. Follow these best practices to maintain a secure environment.",
        "/docs/user-management", None,
        ["users", "permissions", "security", "rbac", "admin"],
        {"readTime": "15 min", "difficulty": "intermediate"}, 15,
    ),
    (
        "doc_004", "document", "Data", "Data Export and Backup",
        "How to export your data and set up automatic backups",
        "Protect your data with regular backups and exports. Learn about supported export "
        "formats (CSV, JSON, XML), scheduled backups, retention policies, and disaster recovery "
        "procedures. Keep your business data safe.",
        "/docs/data-export", None,
        ["backup", "export", "data", "csv", "json"],
        {"readTime": "12 min", "difficulty": "intermediate"}, 20,
    ),
    (
        "article_001", "article", "Productivity", "10 Tips for Better Productivity",
        "Boost your productivity with these proven strategies",
        "Increase your efficiency with time-tested productivity techniques. From time blocking "
        "to the Pomodoro method, learn strategies that successful professionals use. Includes "
        "tips on workspace organization, meeting management, and focus techniques.",
        "/blog/productivity-tips", "/images/blog/productivity.jpg",
        ["productivity", "tips", "efficiency", "work", "focus"],
        {"author": "Jane Smith", "readTime": "8 min"}, 3,
    ),
    (
        "article_002", "article", "Security", "Understanding Cloud Security",
        "Essential cloud security concepts every organization should know",
        "Cloud security is paramount in today's digital landscape. Learn about encryption at rest "
        "and in transit, identity management, network security, compliance requirements, and "
        "security monitoring. Protect your cloud infrastructure effectively.",
        "/blog/cloud-security", "/images/blog/security.jpg",
        ["security", "cloud", "encryption", "compliance", "infrastructure"],
        {"author": "John Doe", "readTime": "12 min"}, 7,
    ),
    (
        "article_003", "article", "Development", "Building Scalable Applications",
        "Architecture patterns for scalable and maintainable applications",
        "Design your applications for scale from day one. Explore microservices architecture, "
        "event-driven design, caching strategies, database optimization, and load balancing "
        "techniques. Real-world examples included.",
        "/blog/scalable-apps", "/images/blog/architecture.jpg",
        ["architecture", "scalability", "microservices", "development", "design"],
        {"author": "Alex Johnson", "readTime": "15 min"}, 10,
    ),
    (
        "help_001", "help", "Account", "How to Reset Your Password",
        "Step-by-step guide to resetting your account password",
        "Forgot your password? No problem. Follow these simple steps to reset your password "
        "securely. You can reset via email verification, SMS code, or security questions. We'll "
        "also show you how to set up a strong password.",
        "/help/reset-password", None,
        ["password", "reset", "account", "security", "login"],
        {"views": "15420"}, 60,
    ),
    (
        "help_002", "help", "Billing", "Billing and Payment FAQ",
        "Common questions about billing, payments, and subscriptions",
        "Find answers to frequently asked billing questions. Learn about payment methods, invoice "
        "generation, subscription upgrades and downgrades, refund policies, and tax information. "
        "Contact support for additional help.",
        "/help/billing-faq", None,
        ["billing", "payment", "subscription", "invoice", "pricing"],
        {"views": "8930"}, 45,
    ),
    (
        "help_003", "help", "Integrations", "Integrating with Third-Party Apps",
        "Connect your favorite tools and services",
        "Extend functionality by integrating with popular services. We support integrations with "
        "Slack, Microsoft Teams, Google Workspace, Salesforce, Jira, and many more. Follow our "
        "step-by-step integration guides.",
        "/help/integrations", None,
        ["integration", "slack", "teams", "google", "api", "connect"],
        {"views": "6750"}, 25,
    ),
    (
        "feature_001", "feature", "Analytics", "Advanced Analytics Dashboard",
        "Powerful analytics and reporting capabilities",
        "Gain insights with our advanced analytics dashboard. Track key metrics, create custom "
        "reports, visualize data with charts and graphs, set up automated alerts, and export data "
        "for further analysis. Real-time data processing included.",
        "/features/analytics", "/images/features/analytics.png",
        ["analytics", "dashboard", "reports", "metrics", "visualization"],
        {"tier": "Professional"}, 90,
    ),
    (
        "feature_002", "feature", "Collaboration", "Team Collaboration Tools",
        "Work together seamlessly with built-in collaboration features",
        "Enhance team productivity with our collaboration suite. Real-time document editing, "
        "threaded comments, task assignments, file sharing, and video conferencing integration. "
        "Keep your team connected and aligned.",
        "/features/collaboration", "/images/features/collaboration.png",
        ["collaboration", "team", "sharing", "comments", "projects"],
        {"tier": "Business"}, 120,
    ),
    (
        "feature_003", "feature", "Automation", "Workflow Automation",
        "Automate repetitive tasks and streamline processes",
        "Save time with powerful automation tools. Create custom workflows, set up triggers and "
        "actions, automate approvals, schedule recurring tasks, and integrate with external "
        "services. No coding required.",
        "/features/automation", "/images/features/automation.png",
        ["automation", "workflow", "tasks", "triggers", "efficiency"],
        {"tier": "Enterprise"}, 80,
    ),
    (
        "tutorial_001", "tutorial", "Guides", "Creating Your First Dashboard",
        "Learn to build custom dashboards from scratch",
        "Build beautiful, functional dashboards in minutes. This tutorial covers widget "
        "selection, layout customization, data source configuration, filtering options, and "
        "sharing settings. Perfect for beginners.",
        "/tutorials/first-dashboard", "/images/tutorials/dashboard.png",
        ["tutorial", "dashboard", "beginner", "customization"],
        {"duration": "20 min", "level": "beginner"}, 8,
    ),
    (
        "tutorial_002", "tutorial", "Security", "Setting Up SSO Authentication",
        "Configure Single Sign-On for your organization",
        "Implement SSO for enhanced security and user convenience. This guide covers SAML 2.0 "
        "and OAuth 2.0 configuration, identity provider setup (Okta, Azure AD, Google), user "
        "provisioning, and troubleshooting common issues.",
        "/tutorials/sso-setup", "/images/tutorials/sso.png",
        ["sso", "authentication", "saml", "oauth", "security", "okta", "azure"],
        {"duration": "45 min", "level": "advanced"}, 12,
    ),
    (
        "news_001", "news", "Updates", "Platform Update: Version 3.0 Released",
        "Exciting new features and improvements in our latest release",
        "We're thrilled to announce version 3.0! This major update includes a redesigned "
        "interface, improved performance, new API endpoints, enhanced security features, and much "
        "more. Read the full release notes.",
        "/news/v3-release", "/images/news/v3.png",
        ["release", "update", "features", "announcement"],
        {"version": "3.0.0"}, 2,
    ),
    (
        "news_002", "news", "Infrastructure", "New Data Center in Europe",
        "Expanding our infrastructure to better serve European customers",
        "We've opened a new data center in Frankfurt, Germany. European customers can now enjoy "
        "lower latency, improved compliance with GDPR requirements, and enhanced data residency "
        "options. Migration assistance available.",
        "/news/eu-datacenter", None,
        ["infrastructure", "europe", "gdpr", "datacenter", "performance"],
        {"region": "EU"}, 14,
    ),
]


def build_catalog(now: datetime | None = None) -> list[SearchableItem]:
    """Build the demo catalogue with creation times relative to ``now``."""
    now = now or utc_now()
    return [
        SearchableItem(
            id=item_id,
            type=item_type,
            category=category,
            title=title,
            description=description,
            content=content,
            url=url,
            image_url=image_url,
            tags=list(tags),
            metadata=dict(metadata),
            created_at=now - timedelta(days=age_days),
        )
        for (
            item_id,
            item_type,
            category,
            title,
            description,
            content,
            url,
            image_url,
            tags,
            metadata,
            age_days,
        ) in _CATALOG
    ]
