# Utils package init
