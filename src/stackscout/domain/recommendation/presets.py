"""Goal-category presets for agents and skills."""

from __future__ import annotations

from types import MappingProxyType

from stackscout.domain.recommendation.value_objects import (
    GoalCategory,
    GoalPreset,
    PresetEntry,
)

_p = PresetEntry

GOAL_PRESETS: MappingProxyType[GoalCategory, GoalPreset] = MappingProxyType(
    {
        GoalCategory.SAAS_DASHBOARD: GoalPreset(
            agents=(
                _p("frontend-engineer", 10, "Dashboard UI development"),
                _p("backend-engineer", 9, "API and data layer"),
                _p("api-designer", 8, "RESTful API design"),
                _p("designer", 8, "UI/UX design and consistency"),
                _p("code-reviewer", 7, "Code quality assurance"),
                _p("architect", 7, "System architecture"),
                _p("debugger", 6, "Troubleshooting"),
                _p("product-manager", 6, "Requirements and prioritization"),
                _p("accessibility-specialist", 5, "Inclusive UI"),
            ),
            skills=(
                _p("react", 10, "UI framework"),
                _p("nextjs", 10, "Full-stack framework"),
                _p("typescript", 9, "Type safety"),
                _p("tailwind", 9, "Styling"),
                _p("prisma", 8, "Database ORM"),
                _p("playwright", 5, "E2E testing"),
            ),
        ),
        GoalCategory.ECOMMERCE: GoalPreset(
            agents=(
                _p("frontend-engineer", 10, "Product pages and checkout UI"),
                _p("backend-engineer", 10, "Order processing and inventory"),
                _p("api-designer", 8, "Cart and checkout APIs"),
                _p("copywriter", 9, "Product descriptions and CTAs"),
                _p("designer", 9, "Shopping experience and visual design"),
                _p("security-analyst", 8, "Payment security"),
                _p("code-reviewer", 7, "Code quality"),
                _p("performance-optimizer", 7, "Page load optimization"),
            ),
            skills=(
                _p("nextjs", 10, "E-commerce framework"),
                _p("react", 9, "UI components"),
                _p("typescript", 9, "Type safety for transactions"),
                _p("stripe", 9, "Payment processing"),
                _p("prisma", 8, "Database ORM"),
                _p("tailwind", 8, "Styling"),
            ),
        ),
        GoalCategory.CONTENT_PLATFORM: GoalPreset(
            agents=(
                _p("frontend-engineer", 10, "Content display and layouts"),
                _p("backend-engineer", 8, "Content API and CMS"),
                _p("docs-writer", 9, "Documentation and content guidelines"),
                _p("copywriter", 8, "Editorial guidelines and microcopy"),
                _p("designer", 8, "Reading experience and typography"),
                _p("code-reviewer", 6, "Code quality"),
                _p("performance-optimizer", 7, "Content delivery optimization"),
            ),
            skills=(
                _p("nextjs", 10, "SSG/SSR for content"),
                _p("react", 9, "UI components"),
                _p("typescript", 8, "Type safety"),
                _p("tailwind", 8, "Styling"),
            ),
        ),
        GoalCategory.API_SERVICE: GoalPreset(
            agents=(
                _p("backend-engineer", 10, "API implementation"),
                _p("api-designer", 10, "API design and documentation"),
                _p("architect", 9, "System architecture"),
                _p("database-specialist", 8, "Data modeling"),
                _p("security-analyst", 8, "API security"),
                _p("sre-engineer", 7, "API reliability and monitoring"),
                _p("docs-writer", 7, "API documentation"),
                _p("testing-specialist", 7, "API testing"),
                _p("code-reviewer", 6, "Code quality"),
            ),
            skills=(
                _p("nodejs", 10, "Runtime"),
                _p("typescript", 9, "Type safety"),
                _p("express", 8, "API framework"),
                _p("prisma", 8, "Database ORM"),
            ),
        ),
        GoalCategory.MOBILE_APP: GoalPreset(
            agents=(
                _p("mobile-specialist", 10, "Cross-platform mobile development"),
                _p("frontend-engineer", 9, "Mobile UI development"),
                _p("backend-engineer", 8, "API for mobile app"),
                _p("designer", 9, "Mobile UI/UX design"),
                _p("api-designer", 7, "Mobile API design"),
                _p("accessibility-specialist", 6, "Mobile accessibility"),
                _p("code-reviewer", 7, "Code quality"),
                _p("testing-specialist", 6, "Mobile testing"),
            ),
            skills=(
                _p("react", 10, "React Native base"),
                _p("typescript", 9, "Type safety"),
                _p("nodejs", 7, "Backend runtime"),
            ),
        ),
        GoalCategory.CLI_TOOL: GoalPreset(
            agents=(
                _p("backend-engineer", 10, "CLI implementation"),
                _p("docs-writer", 9, "CLI documentation"),
                _p("testing-specialist", 8, "CLI testing"),
                _p("copywriter", 7, "Help text and error messages"),
                _p("code-reviewer", 6, "Code quality"),
            ),
            skills=(
                _p("nodejs", 10, "Runtime"),
                _p("typescript", 9, "Type safety"),
            ),
        ),
        GoalCategory.DATA_PIPELINE: GoalPreset(
            agents=(
                _p("data-engineer", 10, "Data pipeline design and implementation"),
                _p("backend-engineer", 9, "Data processing logic"),
                _p("database-specialist", 10, "Data modeling and queries"),
                _p("architect", 9, "Pipeline architecture"),
                _p("devops-specialist", 8, "Pipeline deployment"),
                _p("sre-engineer", 7, "Pipeline reliability and monitoring"),
                _p("code-reviewer", 6, "Code quality"),
            ),
            skills=(
                _p("python", 10, "Data processing language"),
                _p("fastapi", 8, "API framework"),
            ),
        ),
        GoalCategory.AUTH_SERVICE: GoalPreset(
            agents=(
                _p("backend-engineer", 10, "Auth implementation"),
                _p("security-analyst", 10, "Security best practices"),
                _p("api-designer", 8, "Auth API design"),
                _p("architect", 8, "Auth architecture"),
                _p("testing-specialist", 7, "Security testing"),
                _p("code-reviewer", 7, "Code quality"),
            ),
            skills=(
                _p("nodejs", 10, "Runtime"),
                _p("typescript", 9, "Type safety"),
                _p("prisma", 8, "Database ORM"),
            ),
        ),
        GoalCategory.BUSINESS_PLAN: GoalPreset(
            agents=(
                _p("product-manager", 10, "Strategy and market analysis"),
                _p("copywriter", 9, "Compelling narratives and pitches"),
                _p("architect", 8, "Business model structure"),
                _p("docs-writer", 8, "Clear documentation and specs"),
                _p("designer", 7, "Pitch deck visuals"),
            ),
        ),
        GoalCategory.MARKETING_CAMPAIGN: GoalPreset(
            agents=(
                _p("copywriter", 10, "Campaign copy and messaging"),
                _p("product-manager", 9, "Campaign strategy and targeting"),
                _p("designer", 9, "Creative assets and visuals"),
                _p("docs-writer", 7, "Campaign briefs and guidelines"),
                _p("performance-optimizer", 6, "Conversion optimization"),
            ),
        ),
        GoalCategory.CONTENT_CREATION: GoalPreset(
            agents=(
                _p("copywriter", 10, "Writing and content strategy"),
                _p("docs-writer", 9, "Structured content and guides"),
                _p("designer", 7, "Visual content and layouts"),
                _p("product-manager", 6, "Content planning and calendars"),
            ),
        ),
        GoalCategory.RESEARCH_ANALYSIS: GoalPreset(
            agents=(
                _p("architect", 9, "Analytical frameworks"),
                _p("docs-writer", 9, "Research reports and findings"),
                _p("product-manager", 8, "Research planning and synthesis"),
                _p("database-specialist", 7, "Data analysis patterns"),
                _p("copywriter", 6, "Clear communication of insights"),
            ),
        ),
        GoalCategory.PROJECT_DOCS: GoalPreset(
            agents=(
                _p("docs-writer", 10, "Documentation best practices"),
                _p("architect", 9, "System and process design"),
                _p("product-manager", 8, "Requirements and specs"),
                _p("copywriter", 7, "Clear and engaging writing"),
                _p("code-reviewer", 6, "Technical accuracy"),
            ),
        ),
        GoalCategory.CUSTOM: GoalPreset(
            agents=(
                _p("code-reviewer", 8, "Quality assurance"),
                _p("debugger", 7, "Problem solving"),
                _p("docs-writer", 6, "Documentation"),
                _p("architect", 6, "System design"),
                _p("product-manager", 5, "Requirements definition"),
            ),
        ),
    }
)
