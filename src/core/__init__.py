"""Core: dominio, configuración, contratos y orquestación."""
